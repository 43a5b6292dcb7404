# lis_console/domains/usr/crud.py

"""
'usr' 도메인의 게이트웨이와 컨트롤러/목록 뷰 팩토리를 담당하는 모듈입니다.
사용자 화면은 삭제 명령을 제공하지 않습니다.
"""

from typing import Any, Iterable, Optional, Union

import httpx

from lis_console.core.config import settings
from lis_console.core.gateway import ResourceGateway
from lis_console.core.orchestrator import AuditCallback
from lis_console.core.resource import ResourceController, ResourceListView
from lis_console.core.store import entity_id_of
from lis_console.core.view import ViewFilterState, field_value, is_unfiltered, make_predicate
from lis_console.utils.timestamps import today_iso, utc_now_iso

from . import schemas as usr_schemas

# 화면 표시용 역할명 -> 저장된 역할 값
ROLE_LABELS = {
    "Administrator": "admin",
    "Lab Manager": "lab_manager",
    "Lab User": "lab_user",
    "Service User": "service_user",
    "Normal User": "normal_user",
}

# 나이 구간 필터: 라벨 -> (최소, 최대) 포함 범위, None은 열린 구간
AGE_BUCKETS = {
    "Under 18": (None, 17),
    "18-25": (18, 25),
    "26-35": (26, 35),
    "36-45": (36, 45),
    "46-55": (46, 55),
    "Over 55": (56, None),
}


class UserGateway(ResourceGateway[usr_schemas.UserResponse, usr_schemas.UserCreate, usr_schemas.UserUpdate]):
    def __init__(self, *, client: httpx.AsyncClient, endpoint: Optional[str] = None):
        super().__init__(usr_schemas.UserResponse, client=client, endpoint=endpoint or settings.USERS_ENDPOINT)

    async def create(self, *, obj_in: usr_schemas.UserCreate) -> usr_schemas.UserResponse:
        """
        신규 사용자는 active 상태로, 마지막 로그인 날짜는 오늘로 생성합니다.
        """
        now = utc_now_iso()
        payload = self._serialize(obj_in, exclude_unset=True)
        if payload.get("status") is None:
            payload["status"] = "active"
        payload.update({"lastLogin": today_iso(), "createdAt": now, "updatedAt": now})
        return await super().create(obj_in=payload)

    async def update(
        self,
        *,
        obj_in: Union[usr_schemas.UserResponse, usr_schemas.UserUpdate],
        entity_id: Optional[str] = None,
    ) -> usr_schemas.UserResponse:
        payload = self._serialize(obj_in, exclude_unset=True)
        payload["updatedAt"] = utc_now_iso()
        return await super().update(obj_in=payload, entity_id=entity_id or entity_id_of(obj_in))


def age_matches(item: Any, view_filter: ViewFilterState) -> bool:
    selected = view_filter.filters.get("age")
    if is_unfiltered(selected) or selected not in AGE_BUCKETS:
        return True
    age = field_value(item, "age")
    if age is None:
        return False
    low, high = AGE_BUCKETS[selected]
    return (low is None or age >= low) and (high is None or age <= high)


# 이름/이메일/연락처 검색 AND 성별 AND 역할 AND 나이 구간
user_predicate = make_predicate(
    search_fields=("name", "email", "phone"),
    categorical_fields={"gender": "gender", "role": "role", "status": "status"},
    value_maps={"role": ROLE_LABELS},
    extra=(age_matches,),
)


def user_controller(
    client: httpx.AsyncClient, *, audit: Optional[AuditCallback] = None, **kwargs: Any
) -> ResourceController:
    """사용자 컨트롤러를 생성합니다. delete()는 OperationNotSupportedError를 발생시킵니다."""
    return ResourceController(
        UserGateway(client=client), label="User", audit=audit, supports_delete=False, **kwargs
    )


def user_list_view(controller: ResourceController, **kwargs: Any) -> ResourceListView:
    kwargs.setdefault("page_size", settings.USERS_PAGE_SIZE)
    return ResourceListView(controller, predicate=user_predicate, **kwargs)


def display_role(role: str) -> str:
    """저장된 역할 값을 화면 표시용 이름으로 바꿉니다. 모르는 값은 그대로 반환합니다."""
    for label, value in ROLE_LABELS.items():
        if value == role:
            return label
    return role


def summarize_users(users: Iterable[usr_schemas.UserResponse]) -> usr_schemas.UserSummary:
    users = list(users)
    return usr_schemas.UserSummary(
        total_users=len(users),
        active_users=sum(1 for u in users if u.status == "active"),
        inactive_users=sum(1 for u in users if u.status == "inactive"),
        admin_users=sum(1 for u in users if u.role == "admin"),
    )
