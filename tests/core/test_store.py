# tests/core/test_store.py

"""
리소스 스토어(순수 리듀서 `transition()`과 `ResourceStore`)에 대한 단위 테스트 모듈입니다.

- 목록 교체, 생성/수정/삭제 성공 시 로컬 갱신, 실패 시 이전 목록 보존을 검증합니다.
- 성공 결과(last_outcome)와 오류(last_error)의 상호 배타 규칙을 검증합니다.
"""

import logging
from typing import Any, List, Optional

import pytest
from pydantic import BaseModel

from lis_console.core.exceptions import HttpError
from lis_console.core.store import (
    EventType, Outcome, OutcomeKind, RequestStatus, ResourceState, ResourceStore, StoreEvent,
    entity_id_of, transition,
)


class Item(BaseModel):
    id: str
    name: str = ""


def _state(items: List[Any], **kwargs: Any) -> ResourceState:
    return ResourceState().model_copy(update={"items": items, **kwargs})


def _ids(state: ResourceState) -> List[Optional[str]]:
    return [entity_id_of(item) for item in state.items]


# =============================================================================
# 1. 목록 조회
# =============================================================================
def test_list_succeeded_on_empty_store():
    """빈 스토어에 ListSucceeded를 적용하면 목록이 그대로 채워집니다."""
    state = transition(ResourceState(), StoreEvent(type=EventType.LIST_STARTED))
    assert state.request_status == RequestStatus.LOADING

    state = transition(state, StoreEvent(type=EventType.LIST_SUCCEEDED, items=[Item(id="1"), Item(id="2")]))
    assert _ids(state) == ["1", "2"]
    assert state.request_status == RequestStatus.SUCCEEDED
    assert state.last_error is None


def test_list_succeeded_replaces_prior_items():
    """ListSucceeded는 기존 목록과 병합하지 않고 통째로 교체합니다."""
    state = _state([Item(id="1"), Item(id="9", name="stale")])
    fresh = [Item(id="2"), Item(id="3")]

    state = transition(state, StoreEvent(type=EventType.LIST_SUCCEEDED, items=fresh))

    assert state.items == fresh


def test_list_succeeded_with_empty_list_clears_items():
    state = _state([Item(id="1")])
    state = transition(state, StoreEvent(type=EventType.LIST_SUCCEEDED, items=[]))
    assert state.items == []
    assert state.request_status == RequestStatus.SUCCEEDED


# =============================================================================
# 2. 생성 / 수정 / 삭제 성공
# =============================================================================
def test_create_succeeded_appends_entity():
    state = transition(_state([Item(id="1")]), StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="2", name="new")))
    assert _ids(state) == ["1", "2"]
    assert state.last_outcome == Outcome(kind=OutcomeKind.CREATED, message="Item created successfully!")


def test_create_succeeded_twice_is_idempotent():
    """같은 id로 CreateSucceeded를 두 번 적용해도 한 번 적용한 결과와 같습니다."""
    event = StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="7", name="X"))
    once = transition(_state([Item(id="1")]), event)
    twice = transition(once, event)

    assert twice.items == once.items
    assert _ids(twice) == ["1", "7"]


def test_update_succeeded_replaces_matching_entity():
    state = _state([Item(id="1", name="A")])
    state = transition(state, StoreEvent(type=EventType.UPDATE_SUCCEEDED, entity=Item(id="1", name="B")))

    assert state.items == [Item(id="1", name="B")]
    assert state.last_outcome.kind == OutcomeKind.UPDATED


def test_update_succeeded_for_missing_entity_leaves_items():
    """다른 곳에서 이미 삭제된 엔티티의 수정 성공은 목록을 바꾸지 않습니다."""
    state = _state([Item(id="1", name="A")])
    state = transition(state, StoreEvent(type=EventType.UPDATE_SUCCEEDED, entity=Item(id="2", name="B")))

    assert state.items == [Item(id="1", name="A")]
    assert state.request_status == RequestStatus.SUCCEEDED


def test_delete_succeeded_removes_entity():
    state = transition(_state([Item(id="1"), Item(id="2")]), StoreEvent(type=EventType.DELETE_SUCCEEDED, entity_id="1"))
    assert _ids(state) == ["2"]
    assert state.last_outcome.message == "Item deleted successfully!"


def test_delete_succeeded_for_absent_id_is_noop_on_items():
    items = [Item(id="1"), Item(id="2")]
    state = transition(_state(items), StoreEvent(type=EventType.DELETE_SUCCEEDED, entity_id="42"))
    assert state.items == items


def test_items_never_hold_duplicate_ids():
    """생성/수정/삭제를 섞어서 적용해도 같은 id가 두 번 나타나지 않습니다."""
    events = [
        StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="1")),
        StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="2")),
        StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="1", name="again")),
        StoreEvent(type=EventType.UPDATE_SUCCEEDED, entity=Item(id="2", name="B")),
        StoreEvent(type=EventType.DELETE_SUCCEEDED, entity_id="1"),
        StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="1", name="back")),
        StoreEvent(type=EventType.UPDATE_SUCCEEDED, entity=Item(id="3")),
        StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="2", name="dup")),
    ]
    # 서버가 중복 레코드를 내려준 경우도 포함한다.
    state = _state([Item(id="5"), Item(id="5", name="dup")])
    state = transition(state, StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="5", name="one")))

    for event in events:
        state = transition(state, event)
        ids = _ids(state)
        assert len(ids) == len(set(ids))

    assert _ids(state) == ["5", "2", "1"]


def test_outcome_message_uses_resource_label():
    state = transition(ResourceState(), StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="1")), label="Patient")
    assert state.last_outcome.message == "Patient created successfully!"


# =============================================================================
# 3. 실패 처리
# =============================================================================
@pytest.mark.parametrize("failed", [
    EventType.LIST_FAILED, EventType.CREATE_FAILED, EventType.UPDATE_FAILED, EventType.DELETE_FAILED,
])
def test_failure_preserves_items(failed: EventType):
    items = [Item(id="1", name="A"), Item(id="2", name="B")]
    error = HttpError(503)

    state = transition(_state(items), StoreEvent(type=failed, error=str(error), exception=error))

    assert state.items == items
    assert state.request_status == RequestStatus.FAILED
    assert state.last_error == "HTTP 503"
    assert state.last_exception is error


def test_delete_failure_keeps_entity():
    """삭제 요청이 HTTP 500으로 실패하면 목록은 그대로이고 오류 문자열만 남습니다."""
    state = _state([Item(id="1")])
    state = transition(state, StoreEvent(type=EventType.DELETE_STARTED, entity_id="1"))
    state = transition(state, StoreEvent(type=EventType.DELETE_FAILED, error="HTTP 500"))

    assert _ids(state) == ["1"]
    assert state.last_error == "HTTP 500"


def test_failed_event_without_message_gets_default_error():
    state = transition(ResourceState(), StoreEvent(type=EventType.LIST_FAILED))
    assert state.last_error == "Unknown error"


# =============================================================================
# 4. 결과(outcome) / 오류 상호 배타 규칙
# =============================================================================
def test_success_clears_previous_error():
    state = _state([], request_status=RequestStatus.FAILED, last_error="HTTP 500")
    state = transition(state, StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="1")))

    assert state.last_error is None
    assert state.last_outcome is not None


def test_failure_clears_previous_outcome():
    state = transition(ResourceState(), StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="1")))
    state = transition(state, StoreEvent(type=EventType.UPDATE_FAILED, error="HTTP 404"))

    assert state.last_outcome is None
    assert state.last_error == "HTTP 404"


def test_started_clears_only_outcome_of_same_kind():
    created = transition(ResourceState(), StoreEvent(type=EventType.CREATE_SUCCEEDED, entity=Item(id="1")))

    after_delete_started = transition(created, StoreEvent(type=EventType.DELETE_STARTED, entity_id="1"))
    assert after_delete_started.last_outcome.kind == OutcomeKind.CREATED

    after_create_started = transition(created, StoreEvent(type=EventType.CREATE_STARTED))
    assert after_create_started.last_outcome is None
    assert after_create_started.request_status == RequestStatus.LOADING


def test_list_started_clears_any_outcome_and_error():
    state = _state([], last_outcome=Outcome(kind=OutcomeKind.DELETED, message="x"), last_error="boom")
    state = transition(state, StoreEvent(type=EventType.LIST_STARTED))

    assert state.last_outcome is None
    assert state.last_error is None


def test_clear_outcome_and_clear_error_keep_status_and_items():
    items = [Item(id="1")]
    state = _state(
        items,
        request_status=RequestStatus.SUCCEEDED,
        last_outcome=Outcome(kind=OutcomeKind.CREATED, message="x"),
    )
    cleared = transition(state, StoreEvent(type=EventType.CLEAR_OUTCOME))
    assert cleared.last_outcome is None
    assert cleared.request_status == RequestStatus.SUCCEEDED
    assert cleared.items == items

    failed = _state(items, request_status=RequestStatus.FAILED, last_error="HTTP 500", last_exception=HttpError(500))
    cleared = transition(failed, StoreEvent(type=EventType.CLEAR_ERROR))
    assert cleared.last_error is None
    assert cleared.last_exception is None
    assert cleared.request_status == RequestStatus.FAILED


def test_transition_does_not_mutate_input_state():
    items = [Item(id="1")]
    state = _state(items)
    transition(state, StoreEvent(type=EventType.DELETE_SUCCEEDED, entity_id="1"))

    assert state.items == [Item(id="1")]
    assert state.last_outcome is None


def test_entity_id_of_handles_models_and_dicts():
    assert entity_id_of(Item(id="3")) == "3"
    assert entity_id_of({"id": 4}) == "4"
    assert entity_id_of({"id": ""}) is None
    assert entity_id_of({"name": "no id"}) is None


# =============================================================================
# 5. ResourceStore (구독 / 초기화)
# =============================================================================
def test_store_notifies_and_unsubscribes_listeners():
    store = ResourceStore(label="Patient")
    received = []
    unsubscribe = store.subscribe(lambda state, event: received.append((event.type, len(state.items))))

    store.dispatch(StoreEvent(type=EventType.LIST_SUCCEEDED, items=[Item(id="1")]))
    unsubscribe()
    store.dispatch(StoreEvent(type=EventType.DELETE_SUCCEEDED, entity_id="1"))

    assert received == [(EventType.LIST_SUCCEEDED, 1)]
    assert store.state.items == []
    assert store.state.last_outcome.message == "Patient deleted successfully!"


def test_store_listener_error_is_logged(caplog):
    """구독자에서 예외가 나도 스토어 상태와 다른 구독자는 영향을 받지 않습니다."""
    store = ResourceStore(label="User")
    received = []

    def _broken(state, event):
        raise RuntimeError("listener bug")

    store.subscribe(_broken)
    store.subscribe(lambda state, event: received.append(event.type))

    with caplog.at_level(logging.ERROR, logger="lis_console.core.store"):
        state = store.dispatch(StoreEvent(type=EventType.LIST_STARTED))

    assert state.request_status == RequestStatus.LOADING
    assert received == [EventType.LIST_STARTED]
    assert "listener bug" in caplog.text


def test_store_reset_restores_initial_state():
    store = ResourceStore()
    store.dispatch(StoreEvent(type=EventType.LIST_SUCCEEDED, items=[Item(id="1")]))
    store.reset()

    assert store.state.items == []
    assert store.state.request_status == RequestStatus.IDLE
