# lis_console/domains/inst/__init__.py

"""
'inst' 도메인 (분석 장비 관리) 패키지입니다.
"""

__title__ = "LIS Instrument Domain"
__all__ = []
