# 명언 컬렉션 서비스 레이어
# - 저장/조회/삭제 모두 토큰에서 얻은 사용자 ID에만 바인딩됩니다.

from typing import List, Optional, Sequence
import logging

from fastapi import Depends

from ..models.quote import QuoteEntry
from ..repositories.quote_repository import QuoteRepository

logger = logging.getLogger(__name__)

class QuoteService:
    def __init__(self, repo: QuoteRepository):
        self.repo = repo

    @staticmethod
    def _warn_foreign_id(user_id: str, body_user_id: Optional[str]) -> None:
        if body_user_id and body_user_id != user_id:
            logger.warning(
                f"[QuoteService] 본문 userID({body_user_id})가 토큰 사용자({user_id})와 다릅니다. 토큰 사용자 기준으로 처리합니다."
            )

    async def save(self, user_id: str, entries: Sequence[QuoteEntry], body_user_id: Optional[str] = None) -> List[QuoteEntry]:
        self._warn_foreign_id(user_id, body_user_id)
        quotes = await self.repo.append(user_id, entries)
        logger.info(f"[QuoteService] 명언 {len(entries)}개 저장: user={user_id}, total={len(quotes)}")
        return quotes

    async def list(self, user_id: str) -> List[QuoteEntry]:
        return await self.repo.list(user_id)

    async def delete(self, user_id: str, target: QuoteEntry, body_user_id: Optional[str] = None) -> int:
        self._warn_foreign_id(user_id, body_user_id)
        removed = await self.repo.remove(user_id, target)
        logger.info(f"[QuoteService] 명언 {removed}개 삭제: user={user_id}")
        return removed


def get_quote_repository() -> QuoteRepository:
    return QuoteRepository()

def get_quote_service(repo: QuoteRepository = Depends(get_quote_repository)) -> QuoteService:
    return QuoteService(repo)
