# lis_console/core/menu.py

"""
목록 화면의 컨텍스트 액션 메뉴(보기/수정/삭제 드롭다운)를 관리하는 모듈입니다.

목록 전체에서 동시에 열려 있을 수 있는 메뉴는 최대 하나입니다.
상태: 닫힘(open_id=None) 또는 특정 엔티티에 대해 열림(open_id=<id>).
"""

import asyncio
import logging
import time
from typing import Any, Callable, Optional

from lis_console.core.config import settings

logger = logging.getLogger(__name__)


class MenuController:
    def __init__(
        self,
        *,
        outside_click_delay: Optional[float] = None,
        action_close_delay: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        # 설정값은 밀리초 단위, 컨트롤러 내부는 초 단위
        self.outside_click_delay = (
            outside_click_delay if outside_click_delay is not None
            else settings.MENU_OUTSIDE_CLICK_DELAY_MS / 1000
        )
        self.action_close_delay = (
            action_close_delay if action_close_delay is not None
            else settings.MENU_ACTION_CLOSE_DELAY_MS / 1000
        )
        self._clock = clock
        self._open_id: Optional[str] = None
        self._armed_at = 0.0
        self._pending_close: Optional[asyncio.TimerHandle] = None

    @property
    def open_id(self) -> Optional[str]:
        return self._open_id

    def is_open(self, entity_id: str) -> bool:
        return self._open_id == entity_id

    def _rearm(self) -> None:
        # 메뉴를 연 바로 그 클릭이 외부 클릭으로 처리되지 않도록 잠시 무시한다.
        self._armed_at = self._clock() + self.outside_click_delay

    def _cancel_pending_close(self) -> None:
        if self._pending_close is not None:
            self._pending_close.cancel()
            self._pending_close = None

    def toggle(self, entity_id: str) -> Optional[str]:
        """
        닫힘 -> 열림(id), 같은 id면 닫힘, 다른 id면 그 id로 전환 (이전 메뉴는 암묵적으로 닫힘).
        """
        self._cancel_pending_close()
        self._open_id = None if self._open_id == entity_id else entity_id
        self._rearm()
        return self._open_id

    def close(self) -> None:
        self._cancel_pending_close()
        self._open_id = None
        self._rearm()

    def outside_interaction(self, *, inside: bool = False) -> bool:
        """
        포인터 다운 이벤트를 처리합니다. 메뉴 영역 밖이고 활성화 지연이 지났으면 닫습니다.
        메뉴를 닫았으면 True를 반환합니다.
        """
        if self._open_id is None or inside:
            return False
        if self._clock() < self._armed_at:
            return False
        self.close()
        return True

    def action_invoked(self, entity_id: str, handler: Optional[Callable[[str], Any]] = None) -> Any:
        """
        메뉴 액션(보기/수정/삭제)을 실행합니다.
        핸들러는 메뉴가 아직 열려 있는 상태에서 호출되고, 메뉴는 짧은 지연 후에 닫힙니다.
        핸들러의 반환값(코루틴일 수 있음)을 그대로 돌려줍니다.
        실행 중인 이벤트 루프가 없으면 핸들러를 호출하지 않고 RuntimeError를 발생시킵니다.
        """
        loop = asyncio.get_running_loop()
        result = handler(entity_id) if handler is not None else None

        self._cancel_pending_close()
        self._pending_close = loop.call_later(self.action_close_delay, self._close_if_open_for, entity_id)
        return result

    def _close_if_open_for(self, entity_id: str) -> None:
        self._pending_close = None
        # 지연 중에 다른 메뉴가 열렸으면 그 메뉴는 닫지 않는다.
        if self._open_id == entity_id:
            logger.debug("액션 후 메뉴 닫힘 (entity_id=%s)", entity_id)
            self._open_id = None
            self._rearm()

    def reset(self) -> None:
        """전체 데이터 재조회로 목록이 다시 그려질 때 호출합니다."""
        self.close()
