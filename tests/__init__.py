# tests/__init__.py

"""
LIS 관리 콘솔의 테스트 스위트 패키지입니다.

- `core`: 리소스 수명 주기 코어(스토어, 게이트웨이, 오케스트레이터, 파생 뷰, 메뉴, 뷰 계약) 테스트.
- `domains`: 환자/사용자/장비/이벤트 로그 도메인별 통합 테스트 (mockapi 백엔드 사용).

테스트는 `pytest`와 `pytest-asyncio`를 기반으로 작성되었습니다.
"""
