# lis_console/mockapi/routers.py

"""
인메모리 컬렉션 하나에 대한 REST 엔드포인트를 생성하는 모듈입니다.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Response, status

from .collections import InMemoryCollection


def build_collection_router(collection: InMemoryCollection) -> APIRouter:
    router = APIRouter(responses={404: {"description": "Not found"}})

    def _not_found(record_id: str) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{collection.name} 레코드를 찾을 수 없습니다 (id={record_id})",
        )

    @router.get("", response_model=List[Dict[str, Any]], summary=f"{collection.name} 목록 조회")
    async def read_records(
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        order: str = Query("asc"),
    ):
        """`sortBy`, `order` 쿼리 파라미터로 정렬할 수 있습니다."""
        return collection.list(sort_by=sort_by, order=order)

    @router.post("", status_code=status.HTTP_201_CREATED, summary=f"{collection.name} 생성")
    async def create_record(data: Dict[str, Any] = Body(...)):
        return collection.create(data)

    @router.get("/{record_id}", summary=f"{collection.name} 단건 조회")
    async def read_record(record_id: str):
        record = collection.get(record_id)
        if record is None:
            raise _not_found(record_id)
        return record

    @router.put("/{record_id}", summary=f"{collection.name} 수정")
    async def update_record(record_id: str, data: Dict[str, Any] = Body(...)):
        """본문의 필드만 기존 레코드에 병합합니다."""
        record = collection.update(record_id, data)
        if record is None:
            raise _not_found(record_id)
        return record

    @router.delete("/{record_id}", summary=f"{collection.name} 삭제")
    async def delete_record(record_id: str):
        record = collection.delete(record_id)
        if record is None:
            raise _not_found(record_id)
        return record

    return router
