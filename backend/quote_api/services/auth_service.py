# 인증 서비스 레이어
# - 회원가입 (이메일 중복은 저장소의 unique 인덱스로 판단)
# - 로그인 (비밀번호 검증, JWT 토큰 발급)

from typing import Tuple
import logging

from fastapi import Depends
from pydantic import EmailStr

from ..core.exceptions import InvalidCredentialsError
from ..core.security import get_password_hash, verify_password, create_access_token
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def register(self, email: EmailStr, password: str) -> Tuple[str, str]:
        """사용자를 생성하고 (토큰, 사용자 ID)를 반환합니다."""
        hashed = get_password_hash(password)
        user = await self.repo.create(email, hashed)
        user_id = str(user.id)
        logger.info(f"[AuthService] 회원가입 완료: user={user_id}")
        return create_access_token(user_id), user_id

    async def login(self, email: EmailStr, password: str) -> Tuple[str, str]:
        user = await self.repo.get_by_email(email)
        if not user:
            raise InvalidCredentialsError("Invalid credentials")
        if not verify_password(password, user.hashed_password):
            logger.info(f"[AuthService] 비밀번호 불일치: user={user.id}")
            raise InvalidCredentialsError("Invalid password")
        user_id = str(user.id)
        return create_access_token(user_id), user_id


def get_user_repository() -> UserRepository:
    return UserRepository()

def get_auth_service(repo: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(repo)
