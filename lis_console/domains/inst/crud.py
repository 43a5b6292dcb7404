# lis_console/domains/inst/crud.py

"""
'inst' 도메인의 게이트웨이와 컨트롤러/목록 뷰 팩토리를 담당하는 모듈입니다.

장비 변경은 낙관적(optimistic)으로 반영하지 않습니다.
실패한 수정/삭제는 목록을 시도 이전 상태 그대로 남깁니다.
"""

from typing import Any, Iterable, Optional

import httpx

from lis_console.core.config import settings
from lis_console.core.exceptions import PreconditionError
from lis_console.core.gateway import ResourceGateway
from lis_console.core.orchestrator import AuditCallback
from lis_console.core.resource import ResourceController, ResourceListView
from lis_console.core.view import make_predicate

from . import schemas as inst_schemas


class InstrumentGateway(ResourceGateway[inst_schemas.InstrumentResponse, inst_schemas.InstrumentCreate, inst_schemas.InstrumentUpdate]):
    def __init__(self, *, client: httpx.AsyncClient, endpoint: Optional[str] = None):
        super().__init__(inst_schemas.InstrumentResponse, client=client, endpoint=endpoint or settings.INSTRUMENTS_ENDPOINT)

    async def create(self, *, obj_in: inst_schemas.InstrumentCreate) -> inst_schemas.InstrumentResponse:
        """장비명이 비어 있으면 API를 호출하지 않고 PreconditionError를 발생시킵니다."""
        if not obj_in.name or not obj_in.name.strip():
            raise PreconditionError("Instrument name must not be blank")
        return await super().create(obj_in=obj_in)


# 장비명/모델명/시리얼 번호 검색 AND 상태 필터
instrument_predicate = make_predicate(
    search_fields=("name", "model", "serial_number"),
    categorical_fields={"status": "status"},
)


def instrument_controller(
    client: httpx.AsyncClient, *, audit: Optional[AuditCallback] = None, **kwargs: Any
) -> ResourceController:
    return ResourceController(
        InstrumentGateway(client=client), label="Instrument", audit=audit, supports_delete=True, **kwargs
    )


def instrument_list_view(controller: ResourceController, **kwargs: Any) -> ResourceListView:
    kwargs.setdefault("page_size", settings.INSTRUMENTS_PAGE_SIZE)
    return ResourceListView(controller, predicate=instrument_predicate, **kwargs)


def instrument_stats(instruments: Iterable[inst_schemas.InstrumentResponse]) -> inst_schemas.InstrumentStats:
    """장비 화면 상단의 통계 카드 값을 계산합니다."""
    instruments = list(instruments)
    return inst_schemas.InstrumentStats(
        total_instruments=len(instruments),
        active_instruments=sum(1 for i in instruments if i.status == "Active"),
        maintenance_instruments=sum(1 for i in instruments if i.status == "Maintenance"),
        calibration_due=sum(1 for i in instruments if i.calibration_due),
    )
