# lis_console/domains/__init__.py

"""
리소스 도메인 패키지입니다.

각 하위 패키지는 하나의 REST 컬렉션에 대응하며,
`schemas.py`(Pydantic 모델)와 `crud.py`(게이트웨이 및 컨트롤러 팩토리)를 가집니다.

- `pat`: 환자 (Patient)
- `usr`: 사용자 (User)
- `inst`: 분석 장비 (Instrument)
- `evt`: 이벤트 로그 (Audit Event)
"""

__all__ = []
