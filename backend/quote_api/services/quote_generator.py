# 명언 생성 어댑터
# - 외부 텍스트 생성 API(OpenAI Responses)를 고정된 지시문으로 호출
# - 앱 시작 시 1회 생성되어 app.state에 보관, 라우트에는 의존성으로 주입
# - 재시도/캐시 없음 (max_retries=0). 모든 실패는 GenerationError로 변환

from abc import ABC, abstractmethod
from typing import Optional
import logging

import openai
from fastapi import Request

from ..core.config import settings
from ..core.exceptions import GenerationError

logger = logging.getLogger(__name__)

CATEGORY_INSTRUCTION = "Generate an inspirational quote about {category}"
PROMPT_INSTRUCTION = "Generate a quote based on the following prompt: {prompt}"


class QuoteGenerator(ABC):
    """텍스트 생성 공급자 인터페이스

    구현체는 외부 호출 오류를 모두 GenerationError로 감싸야 합니다.
    라우트는 어떤 공급자를 쓰는지 알 필요가 없습니다.
    """

    def generate(self, category: str) -> str:
        return self.complete(CATEGORY_INSTRUCTION.format(category=category), category)

    def generate_from_prompt(self, prompt: str) -> str:
        return self.complete(PROMPT_INSTRUCTION.format(prompt=prompt), prompt)

    @abstractmethod
    def complete(self, instructions: str, user_input: str) -> str:
        """지시문과 입력을 보내고 생성된 텍스트를 그대로 반환합니다."""
        ...

    def close(self) -> None:
        pass


class OpenAIQuoteGenerator(QuoteGenerator):
    """OpenAI Responses API 구현

    openai.OpenAI 클라이언트 하나를 스레드풀의 모든 요청이 공유합니다.
    API 키가 없으면 클라이언트를 만들지 않고, 생성 요청마다 GenerationError를 던집니다.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        max_output_tokens: int = 100,
        timeout: float = 30.0,
        client: Optional[openai.OpenAI] = None,
    ):
        self._model = model
        self._max_output_tokens = max_output_tokens
        if client is None and api_key:
            client = openai.OpenAI(api_key=api_key, base_url=api_base, timeout=timeout, max_retries=0)
        self._client = client

    @classmethod
    def from_settings(cls) -> "OpenAIQuoteGenerator":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            api_base=settings.OPENAI_API_BASE,
            model=settings.OPENAI_MODEL,
            max_output_tokens=settings.QUOTE_MAX_OUTPUT_TOKENS,
            timeout=settings.GENERATION_TIMEOUT_SECONDS,
        )

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def complete(self, instructions: str, user_input: str) -> str:
        if self._client is None:
            raise GenerationError("Error generating quote: API key is not configured")

        logger.info(f"[QuoteGenerator] 생성 요청: model={self._model}")
        try:
            response = self._client.responses.create(
                model=self._model,
                instructions=instructions,
                input=user_input,
                max_output_tokens=self._max_output_tokens,
            )
        except openai.APITimeoutError as e:
            logger.error("[QuoteGenerator] 요청 타임아웃")
            raise GenerationError("Error generating quote: request timed out") from e
        except openai.APIStatusError as e:
            logger.error(f"[QuoteGenerator] API 오류 응답: status={e.status_code}")
            raise GenerationError(
                f"Error generating quote: upstream returned {e.status_code}", status=e.status_code
            ) from e
        except openai.OpenAIError as e:
            logger.error(f"[QuoteGenerator] 요청 실패: {e}", exc_info=True)
            raise GenerationError(f"Error generating quote: {e}") from e

        text = getattr(response, "output_text", None)
        if not isinstance(text, str) or not text:
            logger.error("[QuoteGenerator] 응답에 output_text가 없습니다")
            raise GenerationError("Error generating quote: malformed response")
        return text


def get_quote_generator(request: Request) -> QuoteGenerator:
    # main.py의 startup 이벤트에서 만든 공유 인스턴스
    generator = getattr(request.app.state, "quote_generator", None)
    if generator is None:
        raise GenerationError("Error generating quote: generator is not initialized")
    return generator
