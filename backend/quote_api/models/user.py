# User 도메인 모델 (Beanie Document)
# - 회원가입으로만 생성되며 수정/삭제 API는 없습니다.
# - hashed_password에는 bcrypt 해시만 저장합니다 (평문 비밀번호 저장 금지).
# - email unique 인덱스는 init_beanie 시 생성됩니다. UserRepository.create는 사전 조회 없이
#   insert하고 DuplicateKeyError를 ConflictError로 바꾸므로, 동시 회원가입 중 하나만 성공합니다.

from datetime import datetime, timezone
from beanie import Document, Indexed
from pydantic import EmailStr, Field

class User(Document):
    email: Indexed(EmailStr, unique=True)
    hashed_password: str = Field(repr=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "users"
