# lis_console/core/schemas.py

"""
모든 도메인 스키마가 공유하는 Pydantic 기본 모델입니다.

REST API는 camelCase 키(userId, createdAt 등)를 사용하므로,
파이썬 쪽에서는 snake_case 필드명을 쓰고 직렬화 시 camelCase 별칭으로 변환합니다.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,   # snake_case 필드명으로도 생성 가능
        extra="ignore",          # API가 추가로 내려주는 필드는 무시
    )
