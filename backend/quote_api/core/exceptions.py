# 커스텀 예외 클래스 정의
# - 모든 예외는 QuoteAPIError를 상속합니다.
# - code: 클라이언트에 노출되는 고정 에러 코드 (메시지 문자열 대신 분기용)
# - status_code: main.py의 전역 핸들러가 HTTP 응답 상태로 사용
#
# 주니어 개발자님께: 라우트마다 try/except를 두는 대신 서비스/저장소 레이어에서
# 아래 예외를 던지고, main.py에 등록된 핸들러가 {"message", "error"} JSON으로 변환합니다.

from enum import Enum
from typing import Any, Dict, Optional


class QuoteAPIError(Exception):
    """애플리케이션 예외의 기본 클래스

    Attributes:
        message: 클라이언트에 그대로 전달되는 메시지
        context: 로그에만 남기는 부가 정보 (응답에는 포함하지 않음)
    """
    code = "internal_error"
    status_code = 500

    def __init__(self, message: str = "Internal server error", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ValidationError(QuoteAPIError):
    """필수 필드 누락 등 클라이언트 입력 오류 (400)"""
    code = "validation_error"
    status_code = 400

    def __init__(self, message: str = "Invalid request", field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else None)
        self.field = field


class ConflictError(QuoteAPIError):
    """이메일 중복 (400)

    주니어 개발자님께: 409가 더 정확하지만 기존 클라이언트가 400을 기대하므로 유지합니다.
    """
    code = "conflict"
    status_code = 400

    def __init__(self, message: str = "Email already in use"):
        super().__init__(message)


class InvalidCredentialsError(QuoteAPIError):
    """로그인 실패 (401)"""
    code = "invalid_credentials"
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class TokenErrorKind(str, Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"


class AuthError(QuoteAPIError):
    """Bearer 토큰 검증 실패

    토큰이 아예 없으면 401, 있지만 유효하지 않으면 403을 반환합니다.
    """

    _messages = {
        TokenErrorKind.MISSING: "No token provided",
        TokenErrorKind.MALFORMED: "Invalid token",
        TokenErrorKind.INVALID_SIGNATURE: "Invalid token",
        TokenErrorKind.EXPIRED: "Token expired",
    }

    def __init__(self, kind: TokenErrorKind):
        self.kind = kind
        super().__init__(self._messages[kind], {"kind": kind.value})

    @property
    def code(self) -> str:
        return f"token_{self.kind.value}"

    @property
    def status_code(self) -> int:
        return 401 if self.kind is TokenErrorKind.MISSING else 403


class NotFoundError(QuoteAPIError):
    """삭제 대상 명언이 없을 때 (404)"""
    code = "not_found"
    status_code = 404

    def __init__(self, message: str = "Quote not found", context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


class GenerationError(QuoteAPIError):
    """외부 텍스트 생성 API 호출 실패 (500)

    전송 오류, 인증 오류, 응답 형식 오류를 모두 포함합니다. 재시도하지 않습니다.

    Attributes:
        status: 외부 API의 HTTP 상태 코드 (있는 경우)
    """
    code = "generation_error"
    status_code = 500

    def __init__(self, message: str = "Error generating quote", status: Optional[int] = None):
        super().__init__(message, {"upstream_status": status} if status else None)
        self.status = status


class PersistenceError(QuoteAPIError):
    """MongoDB 작업 실패 (500)"""
    code = "persistence_error"
    status_code = 500
