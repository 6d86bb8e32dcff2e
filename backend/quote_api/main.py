# FastAPI 진입점
# - 로깅 설정
# - Beanie ODM 초기화 (MongoDB)
# - 명언 생성 클라이언트 1회 생성 (app.state.quote_generator)
# - 전역 예외 핸들러, CORS, 라우터 등록

import logging
import sys
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie

from .core.config import settings
from .core.exceptions import QuoteAPIError
from .models.user import User
from .models.quote import QuoteCollection
from .services.quote_generator import OpenAIQuoteGenerator
from .api.routes.auth import router as auth_router
from .api.routes.quotes import router as quotes_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logging.getLogger("pymongo").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# FastAPI 애플리케이션 인스턴스 생성
app = FastAPI(
    title="Quote API",
    description="회원가입/로그인과 사용자별 명언 저장, AI 명언 생성 API",
    version=settings.APP_VERSION,
)

# CORS 허용 도메인 세팅
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# ---- 전역 예외 핸들러 ----
# 모든 에러 응답은 {"message": str, "error": code} 형식입니다.

@app.exception_handler(QuoteAPIError)
async def handle_app_error(request: Request, exc: QuoteAPIError):
    if exc.status_code >= 500:
        logger.error(f"[{request.method} {request.url.path}] {exc.code}: {exc.message} {exc.context}")
    else:
        logger.info(f"[{request.method} {request.url.path}] {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": exc.code},
    )

@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    # 필수 필드 누락/타입 오류는 422 대신 400으로 통일
    errors = exc.errors()
    fields = [".".join(str(p) for p in e.get("loc", ()) if p != "body") for e in errors]
    message = f"Invalid request: {', '.join(f for f in fields if f) or 'body'}"
    return JSONResponse(status_code=400, content={"message": message, "error": "validation_error"})

# 예상하지 못한 예외만 여기로 옵니다 (DB/외부 API 오류는 저장소/어댑터에서 QuoteAPIError로 변환됨).
# Starlette ServerErrorMiddleware는 이 응답을 보낸 뒤 예외를 다시 던지므로 uvicorn 로그에도 트레이스백이 남습니다.
# 버그 추적용으로 의도된 동작입니다.
@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.error(f"[{request.method} {request.url.path}] 처리되지 않은 예외: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"message": "Internal server error", "error": "internal_error"})

# ---- 시작/종료 ----

@app.on_event("startup")
async def app_init():
    # 명언 생성 클라이언트는 DB와 무관하게 항상 준비합니다
    app.state.quote_generator = OpenAIQuoteGenerator.from_settings()
    if not settings.OPENAI_API_KEY:
        logger.warning("[Startup] OPENAI_API_KEY가 설정되지 않았습니다. 명언 생성 요청은 실패합니다.")

    try:
        # serverSelectionTimeoutMS: 5초 안에 연결하지 못하면 타임아웃
        client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=5000)
        await client.admin.command('ping')
        db = client.get_default_database()
        await init_beanie(database=db, document_models=[User, QuoteCollection])
        app.state.mongo_client = client
        logger.info("[Startup] MongoDB 연결 성공")
    except Exception as e:
        # 연결 실패 시에도 서버는 시작됩니다. DB를 쓰는 라우트는 500을 반환합니다.
        logger.error(f"[Startup] MongoDB 연결 실패: {e}")

@app.on_event("shutdown")
async def app_shutdown():
    generator = getattr(app.state, "quote_generator", None)
    if generator is not None:
        generator.close()
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()

# 간단한 헬스체크
@app.get("/")
async def root():
    return {"ok": True, "app": settings.APP_NAME, "time": datetime.now(timezone.utc).isoformat()}

@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME, "version": settings.APP_VERSION}

app.include_router(auth_router)
app.include_router(quotes_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("quote_api.main:app", host=settings.HOST, port=settings.PORT)
