# lis_console/core/gateway.py

"""
REST 컬렉션 엔드포인트에 대한 공통 비동기 게이트웨이(list/create/update/remove) 모듈입니다.

- 재시도, 백오프, 타임아웃 재정의가 없습니다. 실패는 호출자에게 한 번만 전달됩니다.
- HTTP 결과는 `lis_console.core.exceptions`의 오류 분류로 변환됩니다.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from lis_console.core.exceptions import DecodeError, HttpError, NetworkError, PreconditionError
from lis_console.core.store import entity_id_of

logger = logging.getLogger(__name__)

EntityType = TypeVar("EntityType", bound=BaseModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class ResourceGateway(Generic[EntityType, CreateSchemaType, UpdateSchemaType]):
    """
    하나의 REST 컬렉션(E)에 대한 네 가지 작업을 정의하는 기본 클래스입니다.

    | 작업   | 메서드 | 경로     |
    |--------|--------|----------|
    | list   | GET    | E        |
    | create | POST   | E        |
    | update | PUT    | E/{id}   |
    | remove | DELETE | E/{id}   |
    """
    def __init__(self, model: Type[EntityType], *, client: httpx.AsyncClient, endpoint: str):
        self.model = model
        self.client = client
        self.endpoint = endpoint.rstrip("/")
        self._list_adapter = TypeAdapter(List[model])

    def item_url(self, entity_id: str) -> str:
        return f"{self.endpoint}/{entity_id}"

    async def _request(
        self, method: str, url: str, *, json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = await self.client.request(method, url, json=json, params=params)
        except httpx.TransportError as e:
            logger.warning("%s %s 전송 실패: %s", method, url, e)
            raise NetworkError(f"Network error during {method} {url}: {e}") from e

        if not response.is_success:
            logger.warning("%s %s 실패: HTTP %d", method, url, response.status_code)
            raise HttpError(response.status_code, detail=response.text)
        return response

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

    def _validate(self, data: Dict[str, Any]) -> EntityType:
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Response does not match {self.model.__name__}: {e.error_count()} error(s)") from e

    @staticmethod
    def _serialize(obj_in: Union[BaseModel, Dict[str, Any]], *, exclude_unset: bool = False) -> Dict[str, Any]:
        if isinstance(obj_in, BaseModel):
            return obj_in.model_dump(mode="json", by_alias=True, exclude_unset=exclude_unset)
        return dict(obj_in)

    async def list(self, *, params: Optional[Dict[str, Any]] = None) -> List[EntityType]:
        """컬렉션 전체를 조회합니다. 본문이 JSON 배열이 아니면 DecodeError."""
        response = await self._request("GET", self.endpoint, params=params)
        data = self._decode_json(response)
        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array from GET {self.endpoint}, got {type(data).__name__}")
        try:
            return self._list_adapter.validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"List items do not match {self.model.__name__}: {e.error_count()} error(s)") from e

    async def create(self, *, obj_in: CreateSchemaType) -> EntityType:
        """
        새 레코드를 생성합니다. 식별자(id)와 타임스탬프는 서버가 부여합니다.
        응답이 id를 가진 JSON 객체가 아니면 DecodeError.
        """
        response = await self._request("POST", self.endpoint, json=self._serialize(obj_in))
        data = self._decode_json(response)
        if not isinstance(data, dict) or entity_id_of(data) is None:
            raise DecodeError(f"Expected a JSON object with 'id' from POST {self.endpoint}")
        return self._validate(data)

    async def update(
        self, *, obj_in: Union[EntityType, UpdateSchemaType], entity_id: Optional[str] = None
    ) -> EntityType:
        """
        PUT E/{id}로 레코드를 수정합니다.
        `obj_in`은 전체 엔티티 또는 변경할 필드만 설정된 Update 스키마입니다.
        식별자가 없으면 HTTP 호출 없이 PreconditionError를 발생시킵니다.
        """
        target_id = entity_id or entity_id_of(obj_in)
        if target_id is None:
            raise PreconditionError(f"Missing id for update on {self.endpoint}")

        response = await self._request("PUT", self.item_url(target_id), json=self._serialize(obj_in, exclude_unset=True))
        data = self._decode_json(response)
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object from PUT {self.item_url(target_id)}")
        data.setdefault("id", target_id)
        return self._validate(data)

    async def remove(self, *, entity_id: str) -> None:
        """DELETE E/{id}. 2xx면 성공으로 보고 본문은 확인하지 않습니다."""
        if not entity_id:
            raise PreconditionError(f"Missing id for delete on {self.endpoint}")
        await self._request("DELETE", self.item_url(entity_id))
