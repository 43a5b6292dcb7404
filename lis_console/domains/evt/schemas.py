# lis_console/domains/evt/schemas.py

"""
'evt' 도메인 (이벤트 로그)의 Pydantic 스키마를 정의하는 모듈입니다.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from lis_console.core.schemas import ApiModel


class EventLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class EventBase(ApiModel):
    type: EventLevel = Field(description="이벤트 수준 (success, error, warning, info)")
    title: str = Field(description="이벤트 제목")
    category: str = Field(description="분류 (patient, user, instrument 등)")
    description: str = Field(default="", description="상세 설명")
    user: str = Field(description="행위자")
    resource_id: Optional[str] = Field(default=None, description="대상 리소스 ID")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="추가 정보")


class EventCreate(EventBase):
    timestamp: str = Field(description="발생 일시 (ISO-8601 UTC)")


class EventUpdate(ApiModel):
    # 이벤트 로그는 수정하지 않지만 게이트웨이 제네릭 인자를 채우기 위해 정의한다.
    description: Optional[str] = None


class EventResponse(EventBase):
    id: str = Field(description="이벤트 고유 ID")
    timestamp: str = Field(description="발생 일시 (ISO-8601 UTC)")
