# lis_console/domains/pat/schemas.py

"""
'pat' 도메인 (환자 관리)의 Pydantic 스키마를 정의하는 모듈입니다.

REST API는 환자를 사용자(User)와 같은 형태의 레코드로 저장하며,
role 값이 일반 사용자(normal_user/user)인 레코드가 환자입니다.
"""

from typing import Optional
from datetime import datetime

from pydantic import Field

from lis_console.core.schemas import ApiModel


# =============================================================================
# 1. 환자 (Patient) 스키마
# =============================================================================
class PatientBase(ApiModel):
    user_id: str = Field(description="환자 식별 번호 (MRN)")
    name: str = Field(max_length=255, description="환자명")
    email: Optional[str] = Field(default=None, max_length=255, description="이메일")
    phone: Optional[str] = Field(default=None, max_length=50, description="연락처")
    gender: Optional[str] = Field(default=None, max_length=20, description="성별")
    role: str = Field(default="normal_user", description="역할 (환자는 normal_user 또는 user)")
    age: Optional[int] = Field(default=None, ge=0, description="나이")
    address: Optional[str] = Field(default=None, description="주소")
    status: str = Field(default="active", description="상태 (active/inactive)")


class PatientCreate(PatientBase):
    pass  # id, createdAt, updatedAt은 서버/게이트웨이에서 채움


class PatientUpdate(ApiModel):  # 업데이트는 모두 Optional
    id: Optional[str] = Field(None, description="수정 대상 환자 ID")
    user_id: Optional[str] = Field(None, description="환자 식별 번호 (MRN)")
    name: Optional[str] = Field(None, max_length=255, description="환자명")
    email: Optional[str] = Field(None, max_length=255, description="이메일")
    phone: Optional[str] = Field(None, max_length=50, description="연락처")
    gender: Optional[str] = Field(None, max_length=20, description="성별")
    age: Optional[int] = Field(None, ge=0, description="나이")
    address: Optional[str] = Field(None, description="주소")
    status: Optional[str] = Field(None, description="상태")


class PatientResponse(PatientBase):
    id: str = Field(description="환자 레코드 고유 ID")
    created_at: Optional[datetime] = Field(default=None, description="레코드 생성 일시")
    updated_at: Optional[datetime] = Field(default=None, description="레코드 마지막 업데이트 일시")


# =============================================================================
# 2. 요약 카드 스키마
# =============================================================================
class PatientSummary(ApiModel):
    total_patients: int = Field(description="전체 환자 수")
    new_this_month: int = Field(description="이번 달 신규 등록 환자 수")
