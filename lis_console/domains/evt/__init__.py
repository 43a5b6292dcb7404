# lis_console/domains/evt/__init__.py

"""
'evt' 도메인 (이벤트 로그) 패키지입니다.

리소스 변경(생성/수정/삭제) 성공 시 감사(audit) 이벤트를 기록하는 협력자입니다.
"""

__title__ = "LIS Event Log Domain"
__all__ = []
