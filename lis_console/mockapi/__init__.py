# lis_console/mockapi/__init__.py

"""
개발 및 테스트용 인메모리 REST 백엔드 패키지입니다.

patients / users / instruments / events 컬렉션마다
GET(목록), POST, GET/PUT/DELETE {id} 엔드포인트를 제공합니다.
"""

__title__ = "LIS Mock REST API"
__all__ = ["create_app"]

from .main import create_app  # noqa: E402
