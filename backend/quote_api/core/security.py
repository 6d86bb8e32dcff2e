# 보안/인증 유틸리티
# - 비밀번호 해싱/검증
# - JWT 액세스 토큰 발급/검증
# - 현재 사용자 ID 가져오기(의존성)

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from fastapi import Header
from passlib.context import CryptContext
import jwt

from .config import settings
from .exceptions import AuthError, TokenErrorKind

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    # 해시 형식이 잘못된 경우에도 예외 대신 False를 반환합니다
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("[Security] 저장된 비밀번호 해시 형식이 올바르지 않습니다.")
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_token(subject: dict, expires_delta: timedelta) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "exp": now + expires_delta,
        "iat": now,
        "nbf": now,
        **subject,
    }
    token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token

def create_access_token(user_id: str) -> str:
    return create_token({"sub": str(user_id), "type": "access"}, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


@dataclass(frozen=True)
class TokenCheck:
    """토큰 검증 결과. user_id 또는 error 중 하나만 채워집니다."""
    user_id: Optional[str] = None
    error: Optional[TokenErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def verify_access_token(token: Optional[str]) -> TokenCheck:
    """서명과 만료 시각만으로 토큰을 검증합니다 (서버 측 저장/폐기 목록 없음).

    PyJWT는 서명을 먼저 확인한 뒤 exp를 확인하므로, 서명이 올바른 만료 토큰은
    EXPIRED로 분류됩니다.
    """
    if not token:
        return TokenCheck(error=TokenErrorKind.MISSING)
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return TokenCheck(error=TokenErrorKind.EXPIRED)
    except jwt.InvalidSignatureError:
        return TokenCheck(error=TokenErrorKind.INVALID_SIGNATURE)
    except jwt.PyJWTError:
        return TokenCheck(error=TokenErrorKind.MALFORMED)

    user_id = payload.get("sub")
    if payload.get("type") != "access" or not user_id:
        return TokenCheck(error=TokenErrorKind.MALFORMED)
    return TokenCheck(user_id=str(user_id))


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Authorization 헤더에서 토큰 문자열을 꺼냅니다.

    "Bearer <token>" 형식과 스킴 없는 토큰을 모두 허용합니다.
    다른 스킴(예: Basic)은 빈 문자열을 반환하여 MALFORMED로 처리되게 합니다.
    """
    if authorization is None:
        return None
    value = authorization.strip()
    if not value:
        return None
    parts = value.split(" ", 1)
    if len(parts) == 1:
        return parts[0]
    scheme, token = parts
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


async def get_current_user_id(authorization: Optional[str] = Header(default=None)) -> str:
    # 라우트 의존성: 검증에 실패하면 AuthError (401/403)
    token = extract_bearer_token(authorization)
    if token == "":
        raise AuthError(TokenErrorKind.MALFORMED)
    check = verify_access_token(token)
    if not check.ok:
        logger.info(f"[Security] 토큰 검증 실패: {check.error.value}")
        raise AuthError(check.error)
    return check.user_id
