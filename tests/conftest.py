# tests/conftest.py

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Dict, List

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from lis_console import API_PREFIX
from lis_console.mockapi.main import create_app

# 게이트웨이는 API_BASE_URL 기준 상대 경로(/patients 등)로 요청합니다.
BASE_URL = f"http://test{API_PREFIX}"


# --- mockapi 백엔드 픽스처 ---
@pytest.fixture(scope="function")
def mock_app() -> FastAPI:
    """테스트마다 비어 있는 인메모리 REST 백엔드를 새로 생성합니다."""
    return create_app()


@pytest.fixture(scope="function")
def seed(mock_app: FastAPI) -> Callable[[str, List[Dict[str, Any]]], List[Dict[str, Any]]]:
    """
    컬렉션에 초기 레코드를 넣는 함수를 반환합니다.
    서버가 부여한 id가 포함된 레코드 목록을 돌려줍니다.
    """
    def _seed(name: str, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        collection = mock_app.state.collections[name]
        return [collection.create(record) for record in records]
    return _seed


@pytest_asyncio.fixture(scope="function")
async def client(mock_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """mockapi 앱에 ASGITransport로 연결된 AsyncClient를 반환합니다."""
    transport = ASGITransport(app=mock_app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client


# --- 오류 응답 재현용 클라이언트 팩토리 ---
# 역할: httpx.MockTransport 핸들러로 5xx, 잘못된 JSON, 전송 실패 등을 재현합니다.
# 반환된 클라이언트의 `calls` 속성에 실제로 나간 요청이 기록됩니다.
@pytest.fixture(scope="function")
def mock_client_factory() -> Callable[..., Any]:
    @asynccontextmanager
    async def _create_client(handler: Callable[[httpx.Request], httpx.Response]) -> AsyncGenerator[AsyncClient, None]:
        calls: List[httpx.Request] = []

        def _recording_handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        async with AsyncClient(transport=httpx.MockTransport(_recording_handler), base_url=BASE_URL) as client:
            client.calls = calls
            yield client
    return _create_client


# --- 샘플 레코드 ---
@pytest.fixture(scope="function")
def patient_records() -> List[Dict[str, Any]]:
    """환자 화면용 사용자 형태 레코드 (관리자 1건은 환자 목록에서 제외되어야 함)."""
    return [
        {"userId": "MRN-001", "name": "Kim Minsu", "role": "normal_user", "gender": "Male", "age": 34},
        {"userId": "MRN-002", "name": "Lee Jiwoo", "role": "user", "gender": "Female", "age": 27},
        {"userId": "ADM-001", "name": "Park Admin", "role": "admin", "gender": "Male", "age": 45},
        {"userId": "MRN-003", "name": "Choi Yuna", "role": "normal_user", "gender": "Female", "age": 61},
    ]


@pytest.fixture(scope="function")
def user_records() -> List[Dict[str, Any]]:
    return [
        {"name": "Alice Admin", "email": "alice@lab.test", "phone": "010-1111-2222", "gender": "Female",
         "role": "admin", "age": 41, "status": "active"},
        {"name": "Bob Manager", "email": "bob@lab.test", "phone": "010-3333-4444", "gender": "Male",
         "role": "lab_manager", "age": 30, "status": "active"},
        {"name": "Carol Tech", "email": "carol@lab.test", "phone": "010-5555-6666", "gender": "Female",
         "role": "lab_user", "age": 23, "status": "inactive"},
        {"name": "Dan Young", "email": "dan@lab.test", "phone": "010-7777-8888", "gender": "Male",
         "role": "normal_user", "age": 16, "status": "active"},
    ]


@pytest.fixture(scope="function")
def instrument_records() -> List[Dict[str, Any]]:
    return [
        {"name": "Cobas 6000", "model": "c501", "serialNumber": "SN-1001", "status": "Active",
         "calibrationDue": True, "created_at": "2024-03-01T09:00:00Z"},
        {"name": "Sysmex XN", "model": "XN-1000", "serialNumber": "SN-2002", "status": "Maintenance",
         "calibrationDue": False},
        {"name": "Architect", "model": "i2000SR", "serialNumber": "SN-3003", "status": "Active",
         "calibrationDue": True},
    ]
