# lis_console/core/http.py

"""
REST API 호출에 사용할 httpx.AsyncClient를 생성/정리하는 모듈입니다.

모든 게이트웨이는 하나의 클라이언트(커넥션 풀)를 공유하도록 주입받습니다.
타임아웃은 별도로 지정하지 않고 전송 계층의 기본값을 그대로 사용합니다.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx

from lis_console.core.config import settings


@asynccontextmanager
async def get_http_client(
    base_url: Optional[str] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    API_BASE_URL을 기준으로 하는 비동기 HTTP 클라이언트를 제공하는 컨텍스트 관리자입니다.
    테스트에서는 `transport`로 ASGITransport(mockapi 앱)를 주입할 수 있습니다.
    """
    async with httpx.AsyncClient(
        base_url=base_url or settings.API_BASE_URL,
        transport=transport,
        headers={"Accept": "application/json"},
    ) as client:
        yield client
