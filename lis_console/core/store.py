# lis_console/core/store.py

"""
리소스 스토어(Resource Store) 모듈입니다.

한 종류의 엔티티 컬렉션과 요청 수명 주기 상태, 일시적인 작업 결과(성공/실패)를
하나의 불변 상태 객체(`ResourceState`)로 표현하고, 순수 함수 `transition()`으로만 변경합니다.

- 상태는 스토어 인스턴스가 단독으로 소유하며, 뷰는 상태를 직접 수정하지 않습니다.
- `ListSucceeded`는 목록을 통째로 교체합니다 (병합하지 않음).
- 생성/수정/삭제 성공은 목록을 로컬에서 갱신합니다 (재조회하지 않음).
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

EntityType = TypeVar("EntityType", bound=BaseModel)


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OutcomeKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class Outcome(BaseModel):
    """뷰가 한 번 표시하고 명시적으로 지워야 하는 성공 결과(토스트/배너용)."""
    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    message: str


class ResourceState(BaseModel, Generic[EntityType]):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: List[EntityType] = Field(default_factory=list, description="조회 순서대로의 엔티티 목록")
    request_status: RequestStatus = Field(RequestStatus.IDLE, description="가장 최근 요청의 수명 주기")
    last_error: Optional[str] = Field(default=None, description="request_status가 FAILED일 때만 존재")
    last_outcome: Optional[Outcome] = Field(default=None, description="일시적인 성공 결과")
    # 문자열로 변환되기 전의 원본 예외 (협력자가 오류 종류를 구분할 때 사용)
    last_exception: Optional[Exception] = Field(default=None, exclude=True, repr=False)


class EventType(str, Enum):
    LIST_STARTED = "list_started"
    LIST_SUCCEEDED = "list_succeeded"
    LIST_FAILED = "list_failed"
    CREATE_STARTED = "create_started"
    CREATE_SUCCEEDED = "create_succeeded"
    CREATE_FAILED = "create_failed"
    UPDATE_STARTED = "update_started"
    UPDATE_SUCCEEDED = "update_succeeded"
    UPDATE_FAILED = "update_failed"
    DELETE_STARTED = "delete_started"
    DELETE_SUCCEEDED = "delete_succeeded"
    DELETE_FAILED = "delete_failed"
    CLEAR_OUTCOME = "clear_outcome"
    CLEAR_ERROR = "clear_error"


class StoreEvent(BaseModel):
    """
    리듀서에 전달되는 이벤트입니다.
    이벤트 종류에 따라 items / entity / entity_id / error 중 필요한 필드만 채웁니다.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: EventType
    items: Optional[List[Any]] = None
    entity: Optional[Any] = None
    entity_id: Optional[str] = None
    error: Optional[str] = None
    exception: Optional[Exception] = None


# 각 Started 이벤트가 소유하는 결과 종류 (같은 종류의 이전 결과만 지운다)
_STARTED_OUTCOME: Dict[EventType, OutcomeKind] = {
    EventType.CREATE_STARTED: OutcomeKind.CREATED,
    EventType.UPDATE_STARTED: OutcomeKind.UPDATED,
    EventType.DELETE_STARTED: OutcomeKind.DELETED,
}

_FAILED_EVENTS = frozenset({
    EventType.LIST_FAILED,
    EventType.CREATE_FAILED,
    EventType.UPDATE_FAILED,
    EventType.DELETE_FAILED,
})


def entity_id_of(entity: Any) -> Optional[str]:
    """엔티티(Pydantic 모델 또는 dict)의 식별자를 문자열로 반환합니다. 없으면 None."""
    if isinstance(entity, dict):
        value = entity.get("id")
    else:
        value = getattr(entity, "id", None)
    if value is None or value == "":
        return None
    return str(value)


def outcome_message(label: str, kind: OutcomeKind) -> str:
    return f"{label} {kind.value} successfully!"


def _upsert(items: List[Any], entity: Any) -> List[Any]:
    target_id = entity_id_of(entity)
    replaced = False
    result = []
    for item in items:
        if target_id is not None and entity_id_of(item) == target_id:
            if not replaced:
                result.append(entity)
                replaced = True
            continue
        result.append(item)
    if not replaced:
        result.append(entity)
    return result


def _replace(items: List[Any], entity: Any) -> List[Any]:
    target_id = entity_id_of(entity)
    return [entity if entity_id_of(item) == target_id else item for item in items]


def _remove(items: List[Any], entity_id: Optional[str]) -> List[Any]:
    return [item for item in items if entity_id_of(item) != entity_id]


def _settle_success(state: ResourceState, items: List[Any], kind: OutcomeKind, label: str) -> ResourceState:
    return state.model_copy(update={
        "items": items,
        "request_status": RequestStatus.SUCCEEDED,
        "last_error": None,
        "last_exception": None,
        "last_outcome": Outcome(kind=kind, message=outcome_message(label, kind)),
    })


def transition(state: ResourceState, event: StoreEvent, *, label: str = "Item") -> ResourceState:
    """
    현재 상태와 이벤트로부터 새 상태를 계산하는 순수 리듀서입니다.
    입력 상태는 변경하지 않습니다.
    """
    event_type = event.type

    if event_type == EventType.LIST_STARTED:
        # 목록 조회는 새로운 화면으로 간주하므로 이전 결과도 지운다.
        return state.model_copy(update={
            "request_status": RequestStatus.LOADING,
            "last_error": None,
            "last_exception": None,
            "last_outcome": None,
        })

    if event_type in _STARTED_OUTCOME:
        update: Dict[str, Any] = {
            "request_status": RequestStatus.LOADING,
            "last_error": None,
            "last_exception": None,
        }
        if state.last_outcome is not None and state.last_outcome.kind == _STARTED_OUTCOME[event_type]:
            update["last_outcome"] = None
        return state.model_copy(update=update)

    if event_type == EventType.LIST_SUCCEEDED:
        return state.model_copy(update={
            "items": list(event.items or []),
            "request_status": RequestStatus.SUCCEEDED,
            "last_error": None,
            "last_exception": None,
        })

    if event_type == EventType.CREATE_SUCCEEDED:
        return _settle_success(state, _upsert(state.items, event.entity), OutcomeKind.CREATED, label)

    if event_type == EventType.UPDATE_SUCCEEDED:
        # 일치하는 항목이 없으면 (동시에 삭제된 경우) 목록은 그대로 두고 결과만 기록한다.
        return _settle_success(state, _replace(state.items, event.entity), OutcomeKind.UPDATED, label)

    if event_type == EventType.DELETE_SUCCEEDED:
        return _settle_success(state, _remove(state.items, event.entity_id), OutcomeKind.DELETED, label)

    if event_type in _FAILED_EVENTS:
        return state.model_copy(update={
            "request_status": RequestStatus.FAILED,
            "last_error": event.error or "Unknown error",
            "last_exception": event.exception,
            "last_outcome": None,
        })

    if event_type == EventType.CLEAR_OUTCOME:
        return state.model_copy(update={"last_outcome": None})

    if event_type == EventType.CLEAR_ERROR:
        return state.model_copy(update={"last_error": None, "last_exception": None})

    raise ValueError(f"Unknown store event type: {event_type}")


Listener = Callable[[ResourceState, StoreEvent], None]


class ResourceStore(Generic[EntityType]):
    """
    하나의 엔티티 유형에 대한 `ResourceState`를 단독으로 소유하는 스토어입니다.
    전역 싱글턴이 아니라, 생성자로 주입되는 인스턴스로 사용합니다.
    """
    def __init__(self, label: str = "Item"):
        self.label = label
        self._state: ResourceState = ResourceState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ResourceState:
        return self._state

    def dispatch(self, event: StoreEvent) -> ResourceState:
        """이벤트를 리듀서에 적용하고 구독자에게 알립니다."""
        self._state = transition(self._state, event, label=self.label)
        for listener in list(self._listeners):
            try:
                listener(self._state, event)
            except Exception:
                logger.exception("%s 스토어 구독자 처리 중 오류 발생 (event=%s)", self.label, event.type.value)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """구독자를 등록하고, 등록 해제 함수를 반환합니다."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def reset(self) -> None:
        """세션 종료 시 초기 상태로 되돌립니다."""
        self._state = ResourceState()
