# lis_console/domains/evt/services.py

"""
리소스 변경 결과를 이벤트 로그 API에 기록하는 감사(audit) 서비스 모듈입니다.

`EventLogService` 인스턴스는 그대로 오케스트레이터의 감사 콜백으로 전달할 수 있습니다.
기록 실패는 로그만 남기고 호출자에게 전파하지 않습니다.
"""

import logging
from typing import List, Optional

import httpx

from lis_console.core.config import settings
from lis_console.core.exceptions import GatewayError
from lis_console.core.gateway import ResourceGateway
from lis_console.core.orchestrator import AuditEvent
from lis_console.core.store import OutcomeKind
from lis_console.utils.timestamps import utc_now_iso

from . import schemas as evt_schemas

logger = logging.getLogger(__name__)

_LEVELS = {
    OutcomeKind.CREATED: evt_schemas.EventLevel.SUCCESS,
    OutcomeKind.UPDATED: evt_schemas.EventLevel.SUCCESS,
    OutcomeKind.DELETED: evt_schemas.EventLevel.WARNING,
}


class EventGateway(ResourceGateway[evt_schemas.EventResponse, evt_schemas.EventCreate, evt_schemas.EventUpdate]):
    def __init__(self, *, client: httpx.AsyncClient, endpoint: Optional[str] = None):
        super().__init__(evt_schemas.EventResponse, client=client, endpoint=endpoint or settings.EVENTS_ENDPOINT)


def build_event(event: AuditEvent, *, timestamp: Optional[str] = None) -> evt_schemas.EventCreate:
    """감사 알림을 이벤트 로그 레코드로 변환합니다."""
    action = event.kind.value.capitalize()
    category = event.resource.lower()
    return evt_schemas.EventCreate(
        type=_LEVELS[event.kind],
        title=f"{event.resource} {action}: {event.entity_id}",
        category=category,
        description=f"{action} {category} {event.entity_id}",
        user=event.actor,
        resource_id=event.entity_id,
        metadata={"operation": event.kind.value, f"{category}Id": event.entity_id},
        timestamp=timestamp or utc_now_iso(),
    )


class EventLogService:
    def __init__(self, client: httpx.AsyncClient, *, endpoint: Optional[str] = None):
        self.gateway = EventGateway(client=client, endpoint=endpoint)

    async def notify(self, event: AuditEvent) -> Optional[evt_schemas.EventResponse]:
        """
        변경 이벤트를 기록합니다. 실패하면 None을 반환합니다.
        """
        record = build_event(event)
        try:
            saved = await self.gateway.create(obj_in=record)
        except GatewayError as e:
            logger.warning("이벤트 기록 실패 (%s): %s", record.title, e)
            return None
        logger.debug("이벤트 기록 완료: %s (id=%s)", saved.title, saved.id)
        return saved

    async def __call__(self, event: AuditEvent) -> Optional[evt_schemas.EventResponse]:
        return await self.notify(event)

    async def fetch_events(self) -> List[evt_schemas.EventResponse]:
        """최신순(timestamp 내림차순)으로 이벤트 목록을 조회합니다. 실패는 그대로 전파됩니다."""
        return await self.gateway.list(params={"sortBy": "timestamp", "order": "desc"})
