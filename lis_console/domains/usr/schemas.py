# lis_console/domains/usr/schemas.py

"""
'usr' 도메인 (사용자 관리)의 Pydantic 스키마를 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime

from pydantic import Field

from lis_console.core.schemas import ApiModel


class UserBase(ApiModel):
    name: str = Field(max_length=255, description="사용자명")
    email: str = Field(max_length=255, description="이메일")
    phone: Optional[str] = Field(default=None, max_length=50, description="연락처")
    gender: Optional[str] = Field(default=None, max_length=20, description="성별")
    role: str = Field(description="역할 (admin, lab_manager, lab_user, service_user, normal_user)")
    age: Optional[int] = Field(default=None, ge=0, description="나이")
    address: Optional[str] = Field(default=None, description="주소")


class UserCreate(UserBase):
    password: Optional[str] = Field(default=None, min_length=8, description="초기 비밀번호")
    status: Optional[str] = Field(default=None, description="상태 (생략 시 active)")


class UserUpdate(ApiModel):  # 업데이트는 모두 Optional
    id: Optional[str] = Field(None, description="수정 대상 사용자 ID")
    name: Optional[str] = Field(None, max_length=255, description="사용자명")
    email: Optional[str] = Field(None, max_length=255, description="이메일")
    phone: Optional[str] = Field(None, max_length=50, description="연락처")
    gender: Optional[str] = Field(None, max_length=20, description="성별")
    role: Optional[str] = Field(None, description="역할")
    age: Optional[int] = Field(None, ge=0, description="나이")
    address: Optional[str] = Field(None, description="주소")
    status: Optional[str] = Field(None, description="상태")


class UserResponse(UserBase):
    id: str = Field(description="사용자 고유 ID")
    status: str = Field(default="active", description="상태")
    last_login: Optional[str] = Field(default=None, description="마지막 로그인 날짜")
    created_at: Optional[datetime] = Field(default=None, description="레코드 생성 일시")
    updated_at: Optional[datetime] = Field(default=None, description="레코드 마지막 업데이트 일시")


class UserSummary(ApiModel):
    total_users: int = Field(description="전체 사용자 수")
    active_users: int = Field(description="활성 사용자 수")
    inactive_users: int = Field(description="비활성 사용자 수")
    admin_users: int = Field(description="관리자 수")
