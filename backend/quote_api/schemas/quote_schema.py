# 명언 요청/응답 스키마
# - 본문의 userID는 이전 클라이언트 호환용으로만 받고, 실제 사용자는 토큰에서 결정합니다.

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.quote import QuoteEntry

class QuoteItem(BaseModel):
    # 저장 값은 그대로 보존합니다 (공백 제거 없음). 공백만 있는 값은 거부합니다.
    category: str = Field(min_length=1)
    text: str = Field(min_length=1)

    @field_validator("category", "text")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_entry(self) -> QuoteEntry:
        return QuoteEntry(category=self.category, text=self.text)

class GenerateQuoteRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category: str = Field(min_length=1)

class PromptQuoteRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    prompt: str = Field(min_length=1)

class GeneratedQuoteResponse(BaseModel):
    quote: str

class SaveQuotesRequest(BaseModel):
    quotes: List[QuoteItem]
    userID: Optional[str] = None

class DeleteQuoteRequest(BaseModel):
    quoteToDelete: QuoteItem
    userID: Optional[str] = None

class QuoteListResponse(BaseModel):
    quotes: List[QuoteEntry]

class SaveQuotesResponse(QuoteListResponse):
    message: str

class DeleteQuoteResponse(BaseModel):
    message: str
    removed: int
