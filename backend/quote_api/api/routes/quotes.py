# 명언 라우터
# - POST /ai/quote : 카테고리로 명언 생성
# - POST /generate-quote : 자유 프롬프트로 명언 생성 (이전 클라이언트용)
# - POST/GET/DELETE /quotes : 사용자 명언 컬렉션 저장/조회/삭제
#
# 모두 Bearer 토큰 필요. 사용자 ID는 항상 토큰에서 가져옵니다.

from fastapi import APIRouter, Depends

from ...core.security import get_current_user_id
from ...schemas.quote_schema import (
    GenerateQuoteRequest,
    PromptQuoteRequest,
    GeneratedQuoteResponse,
    SaveQuotesRequest,
    SaveQuotesResponse,
    QuoteListResponse,
    DeleteQuoteRequest,
    DeleteQuoteResponse,
)
from ...services.quote_generator import QuoteGenerator, get_quote_generator
from ...services.quote_service import QuoteService, get_quote_service

router = APIRouter(tags=["quotes"])

# 생성 API 호출은 동기 클라이언트(openai.OpenAI)이므로 def 라우트로 두어 스레드풀에서 실행되게 합니다
@router.post("/ai/quote", response_model=GeneratedQuoteResponse, summary="카테고리 기반 명언 생성")
def generate_quote(
    payload: GenerateQuoteRequest,
    user_id: str = Depends(get_current_user_id),
    generator: QuoteGenerator = Depends(get_quote_generator),
):
    return GeneratedQuoteResponse(quote=generator.generate(payload.category))

@router.post("/generate-quote", response_model=GeneratedQuoteResponse, summary="프롬프트 기반 명언 생성")
def generate_quote_from_prompt(
    payload: PromptQuoteRequest,
    user_id: str = Depends(get_current_user_id),
    generator: QuoteGenerator = Depends(get_quote_generator),
):
    return GeneratedQuoteResponse(quote=generator.generate_from_prompt(payload.prompt))

@router.post("/quotes", response_model=SaveQuotesResponse, summary="명언 저장 (기존 목록 뒤에 추가)")
async def save_quotes(
    payload: SaveQuotesRequest,
    user_id: str = Depends(get_current_user_id),
    service: QuoteService = Depends(get_quote_service),
):
    entries = [q.to_entry() for q in payload.quotes]
    quotes = await service.save(user_id, entries, body_user_id=payload.userID)
    return SaveQuotesResponse(message="Quotes saved successfully", quotes=quotes)

@router.get("/quotes", response_model=QuoteListResponse, summary="저장된 명언 목록")
async def list_quotes(
    user_id: str = Depends(get_current_user_id),
    service: QuoteService = Depends(get_quote_service),
):
    return QuoteListResponse(quotes=await service.list(user_id))

@router.delete("/quotes", response_model=DeleteQuoteResponse, summary="명언 삭제 (category, text 정확히 일치)")
async def delete_quote(
    payload: DeleteQuoteRequest,
    user_id: str = Depends(get_current_user_id),
    service: QuoteService = Depends(get_quote_service),
):
    removed = await service.delete(user_id, payload.quoteToDelete.to_entry(), body_user_id=payload.userID)
    return DeleteQuoteResponse(message="Quote deleted successfully", removed=removed)
