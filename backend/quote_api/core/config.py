# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from pydantic import Field

# 프로젝트 루트 디렉토리 경로 찾기
# 이 파일은 backend/quote_api/core/config.py에 있으므로 3단계 상위가 프로젝트 루트입니다.
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"

class Settings(BaseSettings):
    APP_NAME: str = "quote-api"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    MONGODB_URI: str = "mongodb://localhost:27017/quotes"

    JWT_SECRET_KEY: str = Field(..., description="JWT 토큰 서명에 사용되는 비밀키. 반드시 강력한 랜덤 문자열로 설정하세요.")
    JWT_ALGORITHM: str = "HS256"
    # 토큰 수명은 1시간 고정 (리프레시 토큰 없음)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    CORS_ALLOW_ORIGINS: str = "http://localhost:3000"

    # 명언 생성에 사용하는 OpenAI Responses API 설정입니다.
    # 키가 비어 있으면 생성 요청은 모두 GenerationError로 실패합니다.
    OPENAI_API_KEY: str = ""
    OPENAI_API_BASE: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    QUOTE_MAX_OUTPUT_TOKENS: int = 100
    GENERATION_TIMEOUT_SECONDS: float = 30.0

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]

settings = Settings()
