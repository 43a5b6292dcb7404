# lis_console/domains/usr/__init__.py

"""
'usr' 도메인 (사용자 관리) 패키지입니다.

사용자는 조회, 생성, 수정만 지원하며 삭제는 제공하지 않습니다.
"""

__title__ = "LIS User Domain"
__all__ = []
