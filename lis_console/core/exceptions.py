# lis_console/core/exceptions.py

"""
게이트웨이 오류 분류를 정의하는 모듈입니다.

모든 게이트웨이 오류는 `GatewayError`를 상속하며,
오케스트레이터는 이를 하나의 문자열(`last_error`)로 변환하여 스토어에 전달합니다.
원본 예외 객체는 `ResourceState.last_exception`에 보존됩니다.
"""

from typing import Optional


class GatewayError(Exception):
    """게이트웨이 호출 실패의 공통 기본 클래스입니다."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NetworkError(GatewayError):
    """전송 계층 실패 (응답 없음)."""


class HttpError(GatewayError):
    """2xx 범위를 벗어난 HTTP 응답."""

    def __init__(self, status_code: int, detail: Optional[str] = None):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.detail = detail


class DecodeError(GatewayError):
    """응답 본문이 JSON이 아니거나 기대한 형태가 아닌 경우."""


class PreconditionError(GatewayError):
    """호출자가 필수 식별자 등을 빠뜨린 경우 (호출자 버그, 재시도 대상 아님)."""


class OperationNotSupportedError(Exception):
    """리소스가 제공하지 않는 명령을 호출한 경우 (예: 사용자 삭제)."""

    def __init__(self, resource: str, operation: str):
        super().__init__(f"'{resource}' does not support '{operation}'")
        self.resource = resource
        self.operation = operation
