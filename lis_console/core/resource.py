# lis_console/core/resource.py

"""
뷰 계층(화면)에 노출되는 리소스 코어의 계약을 정의하는 모듈입니다.

- `ResourceController`: 읽기 모델 {items, request_status, last_error, last_outcome}과
  명령 집합 {list, create, update, delete, clear_outcome}을 제공합니다.
  성공 결과는 일정 시간(기본 2000ms) 후 자동으로 지워집니다.
- `ResourceListView`: 화면 인스턴스별 검색/필터/페이지 상태와 메뉴 컨트롤러를 묶은 목록 뷰입니다.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Generic, List, Optional

from lis_console.core.config import settings
from lis_console.core.exceptions import OperationNotSupportedError
from lis_console.core.gateway import CreateSchemaType, EntityType, ResourceGateway, UpdateSchemaType
from lis_console.core.menu import MenuController
from lis_console.core.orchestrator import AuditCallback, EffectOrchestrator, Intent
from lis_console.core.store import (
    EventType, Outcome, RequestStatus, ResourceState, ResourceStore, StoreEvent,
)
from lis_console.core import view as view_utils
from lis_console.core.view import PageProjection, Predicate, ViewFilterState

logger = logging.getLogger(__name__)


class ResourceController(Generic[EntityType, CreateSchemaType, UpdateSchemaType]):
    """
    하나의 엔티티 유형에 대한 스토어와 오케스트레이터를 묶은 컨트롤러입니다.
    도메인 모듈(pat/usr/inst)에서 게이트웨이와 함께 생성합니다.
    """
    def __init__(
        self,
        gateway: ResourceGateway[EntityType, CreateSchemaType, UpdateSchemaType],
        *,
        label: str,
        store: Optional[ResourceStore] = None,
        audit: Optional[AuditCallback] = None,
        supports_delete: bool = True,
        auto_dismiss: bool = True,
        outcome_dismiss_ms: Optional[int] = None,
        refresh_after_mutation: bool = False,
        default_actor: Optional[str] = None,
    ):
        self.label = label
        self.store = store or ResourceStore(label=label)
        self.orchestrator = EffectOrchestrator(
            self.store, gateway, audit=audit, default_actor=default_actor or settings.DEFAULT_ACTOR,
        )
        self.supports_delete = supports_delete
        self.auto_dismiss = auto_dismiss
        self.outcome_dismiss_ms = settings.OUTCOME_DISMISS_MS if outcome_dismiss_ms is None else outcome_dismiss_ms
        self.refresh_after_mutation = refresh_after_mutation
        self._dismiss_handle: Optional[asyncio.TimerHandle] = None
        self._dismiss_listeners: List[Callable[[Outcome], None]] = []

    # --- 읽기 모델 ---
    @property
    def state(self) -> ResourceState:
        return self.store.state

    @property
    def items(self) -> List[Any]:
        return self.store.state.items

    @property
    def request_status(self) -> RequestStatus:
        return self.store.state.request_status

    @property
    def last_error(self) -> Optional[str]:
        return self.store.state.last_error

    @property
    def last_outcome(self) -> Optional[Outcome]:
        return self.store.state.last_outcome

    def subscribe(self, listener: Callable[[ResourceState, StoreEvent], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    def add_dismiss_listener(self, listener: Callable[[Outcome], None]) -> Callable[[], None]:
        """
        성공 결과가 자동으로 지워질 때 호출될 콜백을 등록합니다 (예: 생성/수정 모달 닫기).
        """
        self._dismiss_listeners.append(listener)
        return lambda: self._dismiss_listeners.remove(listener) if listener in self._dismiss_listeners else None

    # --- 명령 ---
    async def list(self) -> ResourceState:
        return await self.orchestrator.dispatch(Intent.list())

    async def create(self, payload: CreateSchemaType, *, actor: Optional[str] = None) -> ResourceState:
        state = await self.orchestrator.dispatch(Intent.create(payload, actor=actor))
        self._after_mutation(state)
        return state

    async def update(
        self, entity: Any, *, entity_id: Optional[str] = None, actor: Optional[str] = None
    ) -> ResourceState:
        state = await self.orchestrator.dispatch(Intent.update(entity, entity_id=entity_id, actor=actor))
        self._after_mutation(state)
        return state

    async def delete(self, entity_id: str, *, actor: Optional[str] = None) -> ResourceState:
        if not self.supports_delete:
            raise OperationNotSupportedError(self.label, "delete")
        state = await self.orchestrator.dispatch(Intent.delete(entity_id, actor=actor))
        self._after_mutation(state)
        return state

    def clear_outcome(self) -> ResourceState:
        self._cancel_dismiss()
        return self.store.dispatch(StoreEvent(type=EventType.CLEAR_OUTCOME))

    def clear_error(self) -> ResourceState:
        return self.store.dispatch(StoreEvent(type=EventType.CLEAR_ERROR))

    # --- 성공 결과 자동 해제 ---
    def _after_mutation(self, state: ResourceState) -> None:
        if state.request_status != RequestStatus.SUCCEEDED or state.last_outcome is None:
            return
        if self.auto_dismiss:
            self._schedule_dismiss(state.last_outcome)
        elif self.refresh_after_mutation:
            self.orchestrator.submit(Intent.list())

    def _schedule_dismiss(self, outcome: Outcome) -> None:
        self._cancel_dismiss()
        loop = asyncio.get_running_loop()
        self._dismiss_handle = loop.call_later(self.outcome_dismiss_ms / 1000, self._dismiss, outcome)

    def _cancel_dismiss(self) -> None:
        if self._dismiss_handle is not None:
            self._dismiss_handle.cancel()
            self._dismiss_handle = None

    def _dismiss(self, outcome: Outcome) -> None:
        self._dismiss_handle = None
        # 그 사이에 다른 결과로 바뀌었으면 건드리지 않는다.
        if self.store.state.last_outcome is not outcome:
            return
        self.store.dispatch(StoreEvent(type=EventType.CLEAR_OUTCOME))
        for listener in list(self._dismiss_listeners):
            try:
                listener(outcome)
            except Exception:
                logger.exception("[%s] 결과 해제 콜백 처리 중 오류 발생", self.label)
        # 결과 표시가 끝난 뒤 재조회한다 (ListStarted가 결과를 지우기 때문).
        if self.refresh_after_mutation:
            self.orchestrator.submit(Intent.list())

    async def aclose(self) -> None:
        """예약된 타이머를 취소하고 실행 중인 의도가 끝날 때까지 기다립니다."""
        self._cancel_dismiss()
        await self.orchestrator.drain()


class ResourceListView:
    """
    목록 화면 하나에 대응하는 뷰 모델입니다.
    검색/필터/페이지 상태와 메뉴 상태는 화면 인스턴스마다 독립적입니다.
    """
    def __init__(
        self,
        controller: ResourceController,
        *,
        predicate: Optional[Predicate] = None,
        page_size: Optional[int] = None,
        menu: Optional[MenuController] = None,
    ):
        self.controller = controller
        self.predicate = predicate
        self.page_size = page_size or settings.PAGE_SIZE
        self.menu = menu or MenuController()
        self.filter = ViewFilterState()
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    async def mount(self) -> PageProjection:
        """화면이 표시될 때 스토어를 구독하고 목록 조회를 요청합니다."""
        if self._unsubscribe is None:
            self._unsubscribe = self.controller.subscribe(self._on_store_event)
        await self.controller.list()
        return self.render()

    def unmount(self) -> None:
        """구독만 해제합니다. 진행 중인 요청은 취소하지 않습니다."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.menu.close()

    def _on_store_event(self, state: ResourceState, event: StoreEvent) -> None:
        if event.type == EventType.LIST_SUCCEEDED:
            self.menu.reset()

    # --- 파생 뷰 ---
    def query(self, search_term: str = "", filters: Optional[Dict[str, Optional[str]]] = None, page: int = 1) -> PageProjection:
        """(검색어, 필터, 페이지)로 현재 스토어 상태의 투영을 계산합니다. 상태를 바꾸지 않습니다."""
        view_filter = ViewFilterState(search_term=search_term, filters=filters or {}, page=page)
        return view_utils.project(self.controller.state, view_filter, self.predicate, self.page_size)

    def render(self) -> PageProjection:
        projection = view_utils.project(self.controller.state, self.filter, self.predicate, self.page_size)
        if projection.current_page != self.filter.page:
            # 결과가 줄어 빈 페이지가 보이지 않도록 현재 페이지를 당긴다.
            self.filter = self.filter.model_copy(update={"page": projection.current_page})
        return projection

    def search(self, term: str) -> PageProjection:
        self.filter = view_utils.with_search_term(self.filter, term)
        return self.render()

    def clear_search(self) -> PageProjection:
        return self.search("")

    def set_filter(self, name: str, value: Optional[str]) -> PageProjection:
        self.filter = view_utils.with_filter(self.filter, name, value)
        return self.render()

    def go_to_page(self, page: int) -> PageProjection:
        total_pages = self.render().total_pages
        self.filter = view_utils.go_to_page(self.filter, page, total_pages)
        return self.render()

    def next_page(self) -> PageProjection:
        total_pages = self.render().total_pages
        self.filter = view_utils.next_page(self.filter, total_pages)
        return self.render()

    def prev_page(self) -> PageProjection:
        self.filter = view_utils.prev_page(self.filter)
        return self.render()

    # --- 메뉴 ---
    def toggle_menu(self, entity_id: str) -> Optional[str]:
        return self.menu.toggle(entity_id)

    def invoke_action(self, entity_id: str, handler: Optional[Callable[[str], Any]] = None) -> Any:
        return self.menu.action_invoked(entity_id, handler)
