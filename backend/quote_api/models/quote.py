# 명언 컬렉션 모델
# - 사용자당 문서 1개 (_id = 사용자 ID)
# - quotes 배열에 (category, text) 항목을 삽입 순서대로 저장
# - 추가/삭제는 저장소 레이어에서 $push/$pull 원자 연산으로만 수행

from datetime import datetime, timezone
from typing import List
from beanie import Document, PydanticObjectId
from pydantic import BaseModel, Field

class QuoteEntry(BaseModel):
    category: str
    text: str

class QuoteCollection(Document):
    id: PydanticObjectId  # 소유 사용자 ID를 그대로 _id로 사용
    quotes: List[QuoteEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        name = "quotes"
