# lis_console/core/orchestrator.py

"""
이펙트 오케스트레이터(Effect Orchestrator) 모듈입니다.

의도(Intent)를 받아 `*Started` 이벤트를 발생시키고, 게이트웨이 호출을 기다린 뒤
`*Succeeded` 또는 `*Failed` 이벤트로 결과를 스토어에 반영합니다.

- 자동 재시도는 없습니다.
- 같은 종류의 의도가 동시에 실행되는 것을 막지 않습니다 (List 경쟁 시 마지막 응답이 반영됨).
- 한 번 실행된 의도는 뷰가 사라져도 끝까지 실행되고 결과가 스토어에 반영됩니다.
- 변경 성공 후에는 선택적으로 감사(audit) 콜백을 백그라운드로 호출하며, 그 실패는 로그만 남깁니다.
  `drain()`은 감사 태스크까지 기다립니다.
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Set, Union

from pydantic import BaseModel, ConfigDict

from lis_console.core.exceptions import GatewayError
from lis_console.core.gateway import ResourceGateway
from lis_console.core.store import EventType, OutcomeKind, ResourceState, ResourceStore, StoreEvent, entity_id_of

logger = logging.getLogger(__name__)


class IntentKind(str, Enum):
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Intent(BaseModel):
    """호출자가 요청한 list/create/update/delete 의도입니다."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: IntentKind
    payload: Optional[Any] = None      # CREATE: Create 스키마
    entity: Optional[Any] = None       # UPDATE: 엔티티 또는 Update 스키마
    entity_id: Optional[str] = None    # UPDATE(선택) / DELETE(필수)
    actor: Optional[str] = None        # 감사 이벤트에 기록될 행위자

    @classmethod
    def list(cls) -> "Intent":
        return cls(kind=IntentKind.LIST)

    @classmethod
    def create(cls, payload: Any, *, actor: Optional[str] = None) -> "Intent":
        return cls(kind=IntentKind.CREATE, payload=payload, actor=actor)

    @classmethod
    def update(cls, entity: Any, *, entity_id: Optional[str] = None, actor: Optional[str] = None) -> "Intent":
        return cls(kind=IntentKind.UPDATE, entity=entity, entity_id=entity_id, actor=actor)

    @classmethod
    def delete(cls, entity_id: str, *, actor: Optional[str] = None) -> "Intent":
        return cls(kind=IntentKind.DELETE, entity_id=entity_id, actor=actor)


class AuditEvent(BaseModel):
    """감사 협력자에게 전달되는 변경 알림입니다."""
    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    entity_id: str
    actor: str
    resource: str


AuditCallback = Callable[[AuditEvent], Union[Awaitable[Any], Any]]

_EVENTS = {
    IntentKind.LIST: (EventType.LIST_STARTED, EventType.LIST_SUCCEEDED, EventType.LIST_FAILED),
    IntentKind.CREATE: (EventType.CREATE_STARTED, EventType.CREATE_SUCCEEDED, EventType.CREATE_FAILED),
    IntentKind.UPDATE: (EventType.UPDATE_STARTED, EventType.UPDATE_SUCCEEDED, EventType.UPDATE_FAILED),
    IntentKind.DELETE: (EventType.DELETE_STARTED, EventType.DELETE_SUCCEEDED, EventType.DELETE_FAILED),
}

_AUDIT_KIND = {
    IntentKind.CREATE: OutcomeKind.CREATED,
    IntentKind.UPDATE: OutcomeKind.UPDATED,
    IntentKind.DELETE: OutcomeKind.DELETED,
}


class EffectOrchestrator:
    def __init__(
        self,
        store: ResourceStore,
        gateway: ResourceGateway,
        *,
        audit: Optional[AuditCallback] = None,
        default_actor: str = "system",
    ):
        self.store = store
        self.gateway = gateway
        self.audit = audit
        self.default_actor = default_actor
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """아직 끝나지 않은 백그라운드 태스크(의도 및 감사) 수."""
        return len(self._pending)

    async def dispatch(self, intent: Intent) -> ResourceState:
        """
        의도를 실행하고 결과가 반영된 스토어 상태를 반환합니다.
        게이트웨이 오류는 예외로 전파하지 않고 `*Failed` 이벤트로 변환합니다.
        """
        started, succeeded, failed = _EVENTS[intent.kind]
        self.store.dispatch(StoreEvent(type=started, entity_id=intent.entity_id))
        logger.info("[%s] %s 요청 시작", self.store.label, intent.kind.value)

        try:
            success_event = await self._call_gateway(intent, succeeded)
        except GatewayError as e:
            logger.warning("[%s] %s 요청 실패: %s", self.store.label, intent.kind.value, e)
            return self.store.dispatch(StoreEvent(type=failed, error=str(e), exception=e))

        state = self.store.dispatch(success_event)
        logger.info("[%s] %s 요청 완료", self.store.label, intent.kind.value)

        if intent.kind in _AUDIT_KIND:
            self._spawn_audit(intent, success_event)
        return state

    async def _call_gateway(self, intent: Intent, succeeded: EventType) -> StoreEvent:
        # 게이트웨이 호출이 유일한 중단 지점이다.
        if intent.kind == IntentKind.LIST:
            items = await self.gateway.list()
            return StoreEvent(type=succeeded, items=items)
        if intent.kind == IntentKind.CREATE:
            entity = await self.gateway.create(obj_in=intent.payload)
            return StoreEvent(type=succeeded, entity=entity, entity_id=entity_id_of(entity))
        if intent.kind == IntentKind.UPDATE:
            entity = await self.gateway.update(obj_in=intent.entity, entity_id=intent.entity_id)
            return StoreEvent(type=succeeded, entity=entity, entity_id=entity_id_of(entity))
        await self.gateway.remove(entity_id=intent.entity_id)
        return StoreEvent(type=succeeded, entity_id=intent.entity_id)

    def _spawn_audit(self, intent: Intent, success_event: StoreEvent) -> None:
        """감사 콜백을 백그라운드 태스크로 실행합니다. 변경 의도는 감사 완료를 기다리지 않습니다."""
        if self.audit is None or success_event.entity_id is None:
            return
        event = AuditEvent(
            kind=_AUDIT_KIND[intent.kind],
            entity_id=success_event.entity_id,
            actor=intent.actor or self.default_actor,
            resource=self.store.label,
        )
        self._track(asyncio.create_task(self._notify_audit(event)))

    async def _notify_audit(self, event: AuditEvent) -> None:
        try:
            result = self.audit(event)
            if inspect.isawaitable(result):
                await result
        except Exception:
            # 감사 실패는 UI에 노출하지 않는다.
            logger.exception("[%s] 감사 이벤트 전송 실패 (entity_id=%s)", self.store.label, event.entity_id)

    def submit(self, intent: Intent) -> "asyncio.Task[ResourceState]":
        """
        의도를 백그라운드 태스크로 실행합니다 (fire-and-forget).
        태스크는 `drain()`이 끝날 때까지 추적됩니다.
        """
        return self._track(asyncio.create_task(self.dispatch(intent)))

    def _track(self, task: asyncio.Task) -> asyncio.Task:
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """추적 중인 모든 백그라운드 의도가 끝날 때까지 기다립니다."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
