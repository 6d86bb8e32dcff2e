# 명언 컬렉션 저장소 레이어
# - append: $push + $each (upsert), 애플리케이션에서 읽고-수정-쓰기 하지 않음
# - list: 문서가 없으면 빈 리스트
# - remove: $pull, 삭제 전 문서(pre-image)로 삭제 개수 계산

from datetime import datetime, timezone
from typing import List, Sequence
import logging

from beanie import PydanticObjectId
from beanie.exceptions import CollectionWasNotInitialized
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..models.quote import QuoteCollection, QuoteEntry

logger = logging.getLogger(__name__)


def _object_id(user_id: str) -> PydanticObjectId:
    try:
        return PydanticObjectId(user_id)
    except (InvalidId, TypeError) as e:
        raise ValidationError("Invalid user id", field="userId") from e


def _entries(doc: dict | None) -> List[QuoteEntry]:
    if not doc:
        return []
    return [QuoteEntry(**q) for q in doc.get("quotes", [])]


class QuoteRepository:
    def _collection(self):
        try:
            return QuoteCollection.get_motor_collection()
        except CollectionWasNotInitialized as e:
            # startup에서 MongoDB 연결에 실패한 경우
            raise PersistenceError("Database is not available") from e

    async def append(self, user_id: str, entries: Sequence[QuoteEntry]) -> List[QuoteEntry]:
        """사용자 컬렉션 끝에 항목들을 추가하고 갱신된 전체 목록을 반환합니다."""
        oid = _object_id(user_id)
        now = datetime.now(timezone.utc)
        try:
            doc = await self._collection().find_one_and_update(
                {"_id": oid},
                {
                    "$push": {"quotes": {"$each": [e.model_dump() for e in entries]}},
                    "$set": {"updated_at": now},
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"[QuoteRepository] 명언 저장 실패 (user={user_id}): {e}", exc_info=True)
            raise PersistenceError("Error saving quotes") from e
        return _entries(doc)

    async def list(self, user_id: str) -> List[QuoteEntry]:
        oid = _object_id(user_id)
        try:
            doc = await self._collection().find_one({"_id": oid}, {"quotes": 1})
        except PyMongoError as e:
            logger.error(f"[QuoteRepository] 명언 조회 실패 (user={user_id}): {e}", exc_info=True)
            raise PersistenceError("Error fetching quotes") from e
        return _entries(doc)

    async def remove(self, user_id: str, target: QuoteEntry) -> int:
        """(category, text)가 정확히 일치하는 모든 항목을 삭제하고 삭제 개수를 반환합니다.

        일치하는 항목이 없으면 문서를 수정하지 않고 NotFoundError를 던집니다.
        """
        oid = _object_id(user_id)
        match = {"category": target.category, "text": target.text}
        try:
            before = await self._collection().find_one_and_update(
                {"_id": oid, "quotes": {"$elemMatch": match}},
                {
                    "$pull": {"quotes": match},
                    "$set": {"updated_at": datetime.now(timezone.utc)},
                },
                return_document=ReturnDocument.BEFORE,
            )
        except PyMongoError as e:
            logger.error(f"[QuoteRepository] 명언 삭제 실패 (user={user_id}): {e}", exc_info=True)
            raise PersistenceError("Error deleting quote") from e

        if before is None:
            raise NotFoundError("Quote not found", {"user_id": user_id, **match})
        return sum(1 for q in _entries(before) if q.category == target.category and q.text == target.text)
