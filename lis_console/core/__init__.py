# lis_console/core/__init__.py

"""
리소스 수명 주기 코어 패키지입니다.

- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (Pydantic Settings).
- `exceptions.py`: 게이트웨이 오류 분류 (NetworkError, HttpError, DecodeError, PreconditionError).
- `store.py`: 리소스 상태와 순수 리듀서(transition).
- `gateway.py`: REST 컬렉션 엔드포인트에 대한 비동기 CRUD (httpx).
- `orchestrator.py`: 의도(Intent)를 받아 게이트웨이를 호출하고 스토어 이벤트를 발생시킵니다.
- `view.py`: 검색/필터/페이지네이션 파생 뷰.
- `menu.py`: 한 번에 하나만 열리는 컨텍스트 메뉴 컨트롤러.
- `resource.py`: 뷰 계층에 노출되는 컨트롤러와 목록 뷰.
"""

__title__ = "LIS Console Core"
__version__ = "0.1.0"
__all__ = []
