# lis_console/utils/__init__.py

"""
특정 리소스 도메인에 속하지 않는 범용 유틸리티 패키지입니다.

주요 서브모듈:
- `timestamps.py`: API에 기록하는 ISO-8601 타임스탬프와 날짜 문자열 생성.
"""

# flake8: noqa
from . import timestamps

__title__ = "LIS Console Utilities"
__all__ = ["timestamps"]
