# lis_console/domains/inst/schemas.py

"""
'inst' 도메인 (분석 장비 관리)의 Pydantic 스키마를 정의하는 모듈입니다.

장비 API는 다른 컬렉션과 달리 생성/수정 일시를 snake_case(created_at/updated_at)로 내려줍니다.
"""

from typing import List, Optional
from datetime import datetime

from pydantic import Field

from lis_console.core.schemas import ApiModel


class InstrumentBase(ApiModel):
    name: str = Field(max_length=255, description="장비명")
    model: str = Field(default="", max_length=255, description="모델명")
    status: str = Field(default="Active", description="상태 (Active, Maintenance, Inactive)")
    serial_number: Optional[str] = Field(default=None, max_length=100, description="시리얼 번호")
    location: Optional[str] = Field(default=None, max_length=255, description="설치 위치")
    manufacturer: Optional[str] = Field(default=None, max_length=255, description="제조사")
    supported_test: Optional[List[str]] = Field(default=None, description="지원 검사 목록")
    supported_reagents: Optional[List[str]] = Field(default=None, description="지원 시약 목록")
    calibration_due: Optional[bool] = Field(default=None, description="교정 예정 여부")


class InstrumentCreate(InstrumentBase):
    pass


class InstrumentUpdate(ApiModel):  # 업데이트는 모두 Optional
    id: Optional[str] = Field(None, description="수정 대상 장비 ID")
    name: Optional[str] = Field(None, max_length=255, description="장비명")
    model: Optional[str] = Field(None, max_length=255, description="모델명")
    status: Optional[str] = Field(None, description="상태")
    serial_number: Optional[str] = Field(None, max_length=100, description="시리얼 번호")
    location: Optional[str] = Field(None, max_length=255, description="설치 위치")
    manufacturer: Optional[str] = Field(None, max_length=255, description="제조사")
    supported_test: Optional[List[str]] = Field(None, description="지원 검사 목록")
    supported_reagents: Optional[List[str]] = Field(None, description="지원 시약 목록")
    calibration_due: Optional[bool] = Field(None, description="교정 예정 여부")


class InstrumentResponse(InstrumentBase):
    id: str = Field(description="장비 고유 ID")
    created_at: Optional[datetime] = Field(default=None, alias="created_at", description="레코드 생성 일시")
    updated_at: Optional[datetime] = Field(default=None, alias="updated_at", description="레코드 마지막 업데이트 일시")


class InstrumentStats(ApiModel):
    total_instruments: int = Field(description="전체 장비 수")
    active_instruments: int = Field(description="가동 중인 장비 수")
    maintenance_instruments: int = Field(description="정비 중인 장비 수")
    calibration_due: int = Field(description="교정 예정 장비 수")
