# lis_console/__init__.py

"""
LIS 관리 콘솔(Laboratory Information System Admin Console)의 메인 패키지입니다.

이 패키지는 원격 REST API에 있는 리소스(환자, 사용자, 장비)를
클라이언트 측에서 조회/생성/수정/삭제하기 위한 공통 코어와
각 리소스 도메인별 얇은 구현체로 구성됩니다.

- `core`: 리소스 수명 주기 코어 (스토어, 게이트웨이, 오케스트레이터, 파생 뷰, 메뉴 컨트롤러).
- `domains`: 리소스 유형별 스키마와 게이트웨이 구현 (pat, usr, inst, evt).
- `mockapi`: 개발 및 테스트용 인메모리 REST 백엔드 (FastAPI).
"""

APP_NAME = "LIS Admin Console"
APP_VERSION = "0.1.0"
API_PREFIX = "/api/v1"  # mockapi 라우트의 공통 접두사

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Client-side resource lifecycle core for the LIS admin console."
__all__ = []
