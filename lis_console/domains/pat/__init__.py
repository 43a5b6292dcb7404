# lis_console/domains/pat/__init__.py

"""
'pat' 도메인 (환자 관리) 패키지입니다.

환자 목록은 사용자 컬렉션과 같은 형태의 레코드를 반환하며,
역할(role)이 일반 사용자인 레코드만 환자로 취급합니다.
환자는 조회, 생성, 수정, 삭제를 모두 지원합니다.
"""

__title__ = "LIS Patient Domain"
__all__ = []
