# tests/domains/test_evt.py

"""
'evt' 도메인 (이벤트 로그 / 감사 서비스)에 대한 통합 테스트 모듈입니다.
"""

import logging

import httpx
import pytest
from httpx import AsyncClient

from lis_console.core.orchestrator import AuditEvent
from lis_console.core.store import OutcomeKind, RequestStatus
from lis_console.domains.evt import schemas as evt_schemas
from lis_console.domains.evt.services import EventLogService, build_event
from lis_console.domains.inst import crud as inst_crud
from lis_console.domains.inst import schemas as inst_schemas
from lis_console.domains.pat import crud as pat_crud
from lis_console.domains.pat import schemas as pat_schemas


def test_build_event_record():
    event = AuditEvent(kind=OutcomeKind.CREATED, entity_id="7", actor="nurse01", resource="Patient")

    record = build_event(event, timestamp="2024-05-01T10:00:00.000Z")

    assert record.type == evt_schemas.EventLevel.SUCCESS
    assert record.title == "Patient Created: 7"
    assert record.category == "patient"
    assert record.user == "nurse01"
    assert record.resource_id == "7"
    assert record.metadata == {"operation": "created", "patientId": "7"}


def test_deleted_events_are_warnings():
    event = AuditEvent(kind=OutcomeKind.DELETED, entity_id="3", actor="admin", resource="Instrument")
    record = build_event(event)

    assert record.type == evt_schemas.EventLevel.WARNING
    assert record.title == "Instrument Deleted: 3"
    assert record.timestamp.endswith("Z")


@pytest.mark.asyncio
async def test_notify_posts_event(client: AsyncClient, mock_app):
    service = EventLogService(client)
    event = AuditEvent(kind=OutcomeKind.UPDATED, entity_id="2", actor="admin", resource="User")

    saved = await service.notify(event)

    assert saved.id == "1"
    assert saved.type == evt_schemas.EventLevel.SUCCESS
    stored = mock_app.state.collections["events"].get("1")
    assert stored["resourceId"] == "2"
    assert stored["category"] == "user"


@pytest.mark.asyncio
async def test_notify_failure_returns_none(mock_client_factory, caplog):
    async with mock_client_factory(lambda request: httpx.Response(503)) as client:
        service = EventLogService(client)
        event = AuditEvent(kind=OutcomeKind.CREATED, entity_id="1", actor="admin", resource="Patient")

        with caplog.at_level(logging.WARNING, logger="lis_console.domains.evt.services"):
            saved = await service.notify(event)

    assert saved is None
    assert "HTTP 503" in caplog.text


@pytest.mark.asyncio
async def test_fetch_events_newest_first(client: AsyncClient, seed):
    seed("events", [
        {"type": "success", "title": "older", "category": "patient", "user": "a", "timestamp": "2024-01-01T00:00:00.000Z"},
        {"type": "warning", "title": "newest", "category": "patient", "user": "a", "timestamp": "2024-03-01T00:00:00.000Z"},
        {"type": "info", "title": "middle", "category": "user", "user": "b", "timestamp": "2024-02-01T00:00:00.000Z"},
    ])

    events = await EventLogService(client).fetch_events()

    assert [e.title for e in events] == ["newest", "middle", "older"]


@pytest.mark.asyncio
async def test_controller_mutations_are_audited(client: AsyncClient, mock_app):
    service = EventLogService(client)
    controller = pat_crud.patient_controller(client, audit=service, auto_dismiss=False)

    await controller.create(pat_schemas.PatientCreate(user_id="MRN-1", name="Kim"), actor="nurse01")
    await controller.delete("1", actor="nurse01")
    await controller.aclose()

    events = await service.fetch_events()
    assert sorted(e.title for e in events) == ["Patient Created: 1", "Patient Deleted: 1"]
    assert {e.user for e in events} == {"nurse01"}


@pytest.mark.asyncio
async def test_event_log_outage_does_not_fail_mutation(client: AsyncClient, mock_client_factory):
    async with mock_client_factory(lambda request: httpx.Response(500)) as broken_client:
        controller = inst_crud.instrument_controller(
            client, audit=EventLogService(broken_client), auto_dismiss=False,
        )
        state = await controller.create(inst_schemas.InstrumentCreate(name="Cobas 6000"))
        await controller.aclose()

    assert state.request_status == RequestStatus.SUCCEEDED
    assert state.last_outcome.message == "Instrument created successfully!"
