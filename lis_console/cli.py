# lis_console/cli.py

"""
리소스 코어를 화면 없이 구동하는 명령행 도구입니다.

    lis-console list patients --search kim --page 2
    lis-console list users --filter role="Lab Manager" --filter age=26-35
    lis-console create instruments --data '{"name": "Cobas 6000", "model": "c501"}'
    lis-console update patients 3 --data '{"phone": "010-1234-5678"}'
    lis-console delete patients 3
    lis-console events
    lis-console serve --port 8000
"""

import asyncio
import json
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type

import typer
import uvicorn
from pydantic import BaseModel, ValidationError

from lis_console.core.config import configure_logging, settings
from lis_console.core.exceptions import GatewayError, OperationNotSupportedError
from lis_console.core.http import get_http_client
from lis_console.core.resource import ResourceController, ResourceListView
from lis_console.core.store import RequestStatus, ResourceState
from lis_console.core.view import PageProjection
from lis_console.domains.evt.services import EventLogService
from lis_console.domains.inst import crud as inst_crud
from lis_console.domains.inst import schemas as inst_schemas
from lis_console.domains.pat import crud as pat_crud
from lis_console.domains.pat import schemas as pat_schemas
from lis_console.domains.usr import crud as usr_crud
from lis_console.domains.usr import schemas as usr_schemas

cli = typer.Typer(help="LIS 관리 콘솔 명령행 도구")


class ResourceBinding(NamedTuple):
    controller: Callable[..., ResourceController]
    list_view: Callable[..., ResourceListView]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]


RESOURCES: Dict[str, ResourceBinding] = {
    "patients": ResourceBinding(
        pat_crud.patient_controller, pat_crud.patient_list_view, pat_schemas.PatientCreate, pat_schemas.PatientUpdate
    ),
    "users": ResourceBinding(
        usr_crud.user_controller, usr_crud.user_list_view, usr_schemas.UserCreate, usr_schemas.UserUpdate
    ),
    "instruments": ResourceBinding(
        inst_crud.instrument_controller, inst_crud.instrument_list_view,
        inst_schemas.InstrumentCreate, inst_schemas.InstrumentUpdate,
    ),
}


# =============================================================================
# 1. 입력 파싱 및 출력 도우미
# =============================================================================
def _binding(resource: str) -> ResourceBinding:
    try:
        return RESOURCES[resource]
    except KeyError:
        raise typer.BadParameter(f"지원하지 않는 리소스입니다: {resource} (사용 가능: {', '.join(RESOURCES)})")


def parse_filters(values: Optional[List[str]]) -> Dict[str, str]:
    """`name=value` 형식의 필터 옵션 목록을 dict로 변환합니다."""
    filters: Dict[str, str] = {}
    for raw in values or []:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"필터는 name=value 형식이어야 합니다: {raw}")
        filters[name.strip()] = value.strip()
    return filters


def parse_payload(data: str, schema: Type[BaseModel]) -> BaseModel:
    try:
        return schema.model_validate(json.loads(data))
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"--data 값이 올바른 JSON이 아닙니다: {e}")
    except ValidationError as e:
        raise typer.BadParameter(f"입력값 검증 실패:\n{e}")


def _dump(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump(mode="json", by_alias=True)
    return item


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _fail(message: str, code: int = 1) -> None:
    typer.secho(f"오류: {message}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=code)


def _check(state: ResourceState) -> ResourceState:
    if state.request_status == RequestStatus.FAILED:
        _fail(state.last_error or "알 수 없는 오류")
    return state


def _projection_to_dict(projection: PageProjection) -> Dict[str, Any]:
    return {
        "page": projection.current_page,
        "totalPages": projection.total_pages,
        "filteredCount": projection.filtered_count,
        "items": [_dump(item) for item in projection.page_items],
    }


def _controller(client, binding: ResourceBinding) -> ResourceController:
    audit = EventLogService(client) if settings.AUDIT_ENABLED else None
    # 명령 한 번으로 종료되므로 결과 자동 해제 타이머는 필요 없다.
    return binding.controller(client, audit=audit, auto_dismiss=False)


# =============================================================================
# 2. 비동기 실행부
# =============================================================================
async def run_list(
    resource: str, *, search: str = "", filters: Optional[Dict[str, str]] = None, page: int = 1, base_url: Optional[str] = None,
) -> PageProjection:
    binding = _binding(resource)
    async with get_http_client(base_url) as client:
        controller = _controller(client, binding)
        view = binding.list_view(controller)
        await view.mount()
        _check(controller.state)
        view.search(search)
        for name, value in (filters or {}).items():
            view.set_filter(name, value)
        # 범위를 벗어난 페이지는 마지막 페이지로 당긴다.
        view.filter = view.filter.model_copy(update={"page": page})
        projection = view.render()
        view.unmount()
        await controller.aclose()
        return projection


async def run_mutation(
    resource: str, command: str, *, actor: str, base_url: Optional[str] = None, **kwargs: Any
) -> ResourceState:
    binding = _binding(resource)
    async with get_http_client(base_url) as client:
        controller = _controller(client, binding)
        try:
            if command == "create":
                state = await controller.create(kwargs["payload"], actor=actor)
            elif command == "update":
                state = await controller.update(kwargs["patch"], entity_id=kwargs["entity_id"], actor=actor)
            else:
                state = await controller.delete(kwargs["entity_id"], actor=actor)
        finally:
            await controller.aclose()
        return _check(state)


async def run_fetch_events(base_url: Optional[str] = None) -> List[Any]:
    async with get_http_client(base_url) as client:
        return await EventLogService(client).fetch_events()


# =============================================================================
# 3. 명령
# =============================================================================
@cli.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="REST API 기본 URL (기본값: API_BASE_URL 설정)"),
):
    """로깅을 설정하고 공통 옵션을 저장합니다."""
    configure_logging()
    ctx.obj = {"base_url": base_url}


def _base_url(ctx: typer.Context) -> Optional[str]:
    return (ctx.obj or {}).get("base_url")


@cli.command("list")
def list_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="patients, users, instruments"),
    search: str = typer.Option("", "--search", "-s", help="검색어 (대소문자 무시 부분 일치)"),
    filters: Optional[List[str]] = typer.Option(None, "--filter", "-f", help="범주형 필터 name=value (여러 번 지정 가능)"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="페이지 번호 (1부터)"),
):
    """리소스 목록을 조회하고 검색/필터/페이지를 적용해 출력합니다."""
    projection = asyncio.run(
        run_list(resource, search=search, filters=parse_filters(filters), page=page, base_url=_base_url(ctx))
    )
    _echo_json(_projection_to_dict(projection))


@cli.command("create")
def create_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="patients, users, instruments"),
    data: str = typer.Option(..., "--data", "-d", help="생성할 레코드 (JSON 객체)"),
    actor: str = typer.Option(settings.DEFAULT_ACTOR, "--actor", help="감사 이벤트에 기록될 행위자"),
):
    """새 레코드를 생성합니다."""
    payload = parse_payload(data, _binding(resource).create_schema)
    state = asyncio.run(run_mutation(resource, "create", actor=actor, payload=payload, base_url=_base_url(ctx)))
    typer.secho(state.last_outcome.message, fg=typer.colors.GREEN)
    _echo_json(_dump(state.items[-1]) if state.items else None)


@cli.command("update")
def update_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="patients, users, instruments"),
    entity_id: str = typer.Argument(..., help="수정할 레코드 ID"),
    data: str = typer.Option(..., "--data", "-d", help="변경할 필드 (JSON 객체)"),
    actor: str = typer.Option(settings.DEFAULT_ACTOR, "--actor", help="감사 이벤트에 기록될 행위자"),
):
    """기존 레코드의 일부 필드를 수정합니다."""
    patch = parse_payload(data, _binding(resource).update_schema)
    state = asyncio.run(
        run_mutation(resource, "update", actor=actor, patch=patch, entity_id=entity_id, base_url=_base_url(ctx))
    )
    typer.secho(state.last_outcome.message, fg=typer.colors.GREEN)


@cli.command("delete")
def delete_command(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="patients, instruments"),
    entity_id: str = typer.Argument(..., help="삭제할 레코드 ID"),
    actor: str = typer.Option(settings.DEFAULT_ACTOR, "--actor", help="감사 이벤트에 기록될 행위자"),
    yes: bool = typer.Option(False, "--yes", "-y", help="확인 없이 삭제"),
):
    """레코드를 삭제합니다. 사용자(users)는 삭제를 지원하지 않습니다."""
    if not yes and not typer.confirm(f"{resource} {entity_id} 레코드를 삭제하시겠습니까?"):
        raise typer.Abort()
    try:
        state = asyncio.run(run_mutation(resource, "delete", actor=actor, entity_id=entity_id, base_url=_base_url(ctx)))
    except OperationNotSupportedError as e:
        _fail(str(e), code=2)
    typer.secho(state.last_outcome.message, fg=typer.colors.GREEN)


@cli.command("events")
def events_command(ctx: typer.Context):
    """이벤트 로그를 최신순으로 출력합니다."""
    try:
        events = asyncio.run(run_fetch_events(_base_url(ctx)))
    except GatewayError as e:
        _fail(str(e))
    _echo_json([_dump(event) for event in events])


@cli.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="바인딩 주소"),
    port: int = typer.Option(8000, "--port", help="포트"),
):
    """개발용 인메모리 mockapi 백엔드를 실행합니다."""
    uvicorn.run("lis_console.mockapi.main:app", host=host, port=port, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    cli()
