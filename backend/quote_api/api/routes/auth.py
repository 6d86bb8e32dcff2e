# 인증 라우터
# - 회원가입: POST /signup
# - 로그인: POST /login
# - 토큰 확인: GET /protected

from fastapi import APIRouter, Depends, status

from ...schemas.user_schema import UserCreate, AuthResponse, ProtectedResponse
from ...services.auth_service import AuthService, get_auth_service
from ...core.security import get_current_user_id

router = APIRouter(tags=["auth"])

@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="회원가입 (이메일 중복 시 400)")
async def signup(payload: UserCreate, service: AuthService = Depends(get_auth_service)):
    token, user_id = await service.register(payload.email, payload.password)
    return AuthResponse(token=token, user_id=user_id)

@router.post("/login", response_model=AuthResponse, summary="로그인 (JWT 액세스 토큰 발급)")
async def login(payload: UserCreate, service: AuthService = Depends(get_auth_service)):
    token, user_id = await service.login(payload.email, payload.password)
    return AuthResponse(token=token, user_id=user_id)

@router.get("/protected", response_model=ProtectedResponse, summary="토큰 검증 확인용")
async def protected(user_id: str = Depends(get_current_user_id)):
    return ProtectedResponse(message="Access granted", user_id=user_id)
