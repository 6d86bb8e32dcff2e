# 사용자 저장소 레이어
# - 데이터 접근(조회/생성)만 담당 (서비스 로직 분리)
# - 이메일 중복은 조회 후 삽입이 아니라 unique 인덱스 위반(DuplicateKeyError)으로 판단

from typing import Optional
import logging

from pydantic import EmailStr
from beanie.exceptions import CollectionWasNotInitialized
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..core.exceptions import ConflictError, PersistenceError
from ..models.user import User

logger = logging.getLogger(__name__)

class UserRepository:
    async def get_by_email(self, email: EmailStr) -> Optional[User]:
        try:
            return await User.find_one(User.email == email)
        except (PyMongoError, CollectionWasNotInitialized) as e:
            logger.error(f"[UserRepository] 사용자 조회 실패: {e}", exc_info=True)
            raise PersistenceError("Error logging in") from e

    async def create(self, email: EmailStr, hashed_password: str) -> User:
        try:
            user = User(email=email, hashed_password=hashed_password)
            return await user.insert()
        except DuplicateKeyError as e:
            raise ConflictError("Email already in use") from e
        except (PyMongoError, CollectionWasNotInitialized) as e:
            logger.error(f"[UserRepository] 사용자 생성 실패: {e}", exc_info=True)
            raise PersistenceError("Error creating user") from e
