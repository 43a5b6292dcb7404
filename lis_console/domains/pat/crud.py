# lis_console/domains/pat/crud.py

"""
'pat' 도메인의 게이트웨이와 컨트롤러/목록 뷰 팩토리를 담당하는 모듈입니다.
"""

from datetime import UTC, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

import httpx

from lis_console.core.config import settings
from lis_console.core.gateway import ResourceGateway
from lis_console.core.orchestrator import AuditCallback
from lis_console.core.resource import ResourceController, ResourceListView
from lis_console.core.store import entity_id_of
from lis_console.core.view import make_predicate
from lis_console.utils.timestamps import utc_now_iso

from . import schemas as pat_schemas

# 환자로 취급하는 사용자 역할
PATIENT_ROLES = ("normal_user", "user")


# =============================================================================
# 1. 환자 (Patient) 게이트웨이
# =============================================================================
class PatientGateway(ResourceGateway[pat_schemas.PatientResponse, pat_schemas.PatientCreate, pat_schemas.PatientUpdate]):
    def __init__(self, *, client: httpx.AsyncClient, endpoint: Optional[str] = None):
        super().__init__(pat_schemas.PatientResponse, client=client, endpoint=endpoint or settings.PATIENTS_ENDPOINT)

    async def list(self, *, params: Optional[Dict[str, Any]] = None) -> List[pat_schemas.PatientResponse]:
        """사용자 형태의 레코드 중 환자 역할만 걸러서 반환합니다."""
        records = await super().list(params=params)
        return [record for record in records if record.role in PATIENT_ROLES]

    async def create(self, *, obj_in: pat_schemas.PatientCreate) -> pat_schemas.PatientResponse:
        """생성/수정 일시를 채워서 생성합니다."""
        now = utc_now_iso()
        payload = self._serialize(obj_in)
        payload.update({"createdAt": now, "updatedAt": now})
        return await super().create(obj_in=payload)

    async def update(
        self,
        *,
        obj_in: Union[pat_schemas.PatientResponse, pat_schemas.PatientUpdate],
        entity_id: Optional[str] = None,
    ) -> pat_schemas.PatientResponse:
        """수정 일시(updatedAt)를 갱신해서 수정합니다."""
        payload = self._serialize(obj_in, exclude_unset=True)
        payload["updatedAt"] = utc_now_iso()
        return await super().update(obj_in=payload, entity_id=entity_id or entity_id_of(obj_in))


# =============================================================================
# 2. 검색 조건자 및 팩토리
# =============================================================================
# 환자명 또는 환자 번호(MRN) 부분 일치
patient_predicate = make_predicate(search_fields=("name", "user_id"))


def patient_controller(
    client: httpx.AsyncClient, *, audit: Optional[AuditCallback] = None, **kwargs: Any
) -> ResourceController:
    """환자 컨트롤러를 생성합니다. 환자는 삭제를 지원합니다."""
    return ResourceController(
        PatientGateway(client=client), label="Patient", audit=audit, supports_delete=True, **kwargs
    )


def patient_list_view(controller: ResourceController, **kwargs: Any) -> ResourceListView:
    kwargs.setdefault("page_size", settings.PAGE_SIZE)
    return ResourceListView(controller, predicate=patient_predicate, **kwargs)


def summarize_patients(
    patients: Iterable[pat_schemas.PatientResponse], *, now: Optional[datetime] = None
) -> pat_schemas.PatientSummary:
    now = now or datetime.now(UTC)
    patients = list(patients)
    new_this_month = sum(
        1 for p in patients
        if p.created_at is not None and (p.created_at.year, p.created_at.month) == (now.year, now.month)
    )
    return pat_schemas.PatientSummary(total_patients=len(patients), new_this_month=new_this_month)
