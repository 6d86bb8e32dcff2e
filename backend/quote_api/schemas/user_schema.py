# 요청/응답 스키마 정의 (Pydantic 모델)

from pydantic import BaseModel, ConfigDict, EmailStr, Field

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class AuthResponse(BaseModel):
    # 기존 프론트엔드가 camelCase(userId)를 사용합니다
    model_config = ConfigDict(populate_by_name=True)

    token: str
    user_id: str = Field(alias="userId")

class ProtectedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: str = Field(alias="userId")
