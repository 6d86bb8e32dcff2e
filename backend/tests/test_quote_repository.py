# 명언 저장소 테스트 - motor 컬렉션을 모킹하여 원자 연산 형태를 검증
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from beanie.exceptions import CollectionWasNotInitialized
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from quote_api.core.exceptions import NotFoundError, PersistenceError, ValidationError
from quote_api.models.quote import QuoteCollection, QuoteEntry
from quote_api.repositories.quote_repository import QuoteRepository

USER_ID = str(ObjectId())


def _mock_collection():
    coll = MagicMock()
    coll.find_one = AsyncMock()
    coll.find_one_and_update = AsyncMock()
    return coll


def test_append_uses_atomic_push_with_upsert():
    coll = _mock_collection()
    coll.find_one_and_update.return_value = {
        "_id": ObjectId(USER_ID),
        "quotes": [{"category": "old", "text": "Q0"}, {"category": "fun", "text": "Q1"}],
    }
    with patch.object(QuoteCollection, "get_motor_collection", return_value=coll):
        quotes = asyncio.run(QuoteRepository().append(USER_ID, [QuoteEntry(category="fun", text="Q1")]))

    assert [q.text for q in quotes] == ["Q0", "Q1"]
    args, kwargs = coll.find_one_and_update.call_args
    query, update = args
    assert query == {"_id": ObjectId(USER_ID)}
    assert update["$push"] == {"quotes": {"$each": [{"category": "fun", "text": "Q1"}]}}
    assert "updated_at" in update["$set"]
    assert "created_at" in update["$setOnInsert"]
    assert kwargs["upsert"] is True
    assert kwargs["return_document"] == ReturnDocument.AFTER


def test_list_without_collection_returns_empty():
    coll = _mock_collection()
    coll.find_one.return_value = None
    with patch.object(QuoteCollection, "get_motor_collection", return_value=coll):
        assert asyncio.run(QuoteRepository().list(USER_ID)) == []


def test_list_keeps_insertion_order():
    coll = _mock_collection()
    coll.find_one.return_value = {"quotes": [{"category": "a", "text": "1"}, {"category": "b", "text": "2"}]}
    with patch.object(QuoteCollection, "get_motor_collection", return_value=coll):
        quotes = asyncio.run(QuoteRepository().list(USER_ID))
    assert [(q.category, q.text) for q in quotes] == [("a", "1"), ("b", "2")]


def test_remove_counts_every_exact_match():
    coll = _mock_collection()
    coll.find_one_and_update.return_value = {
        "quotes": [
            {"category": "fun", "text": "Q1"},
            {"category": "fun", "text": "Q2"},
            {"category": "fun", "text": "Q1"},
        ]
    }
    with patch.object(QuoteCollection, "get_motor_collection", return_value=coll):
        removed = asyncio.run(QuoteRepository().remove(USER_ID, QuoteEntry(category="fun", text="Q1")))

    assert removed == 2
    args, kwargs = coll.find_one_and_update.call_args
    query, update = args
    assert query["quotes"] == {"$elemMatch": {"category": "fun", "text": "Q1"}}
    assert update["$pull"] == {"quotes": {"category": "fun", "text": "Q1"}}
    assert kwargs["return_document"] == ReturnDocument.BEFORE


def test_remove_without_match_raises_not_found():
    coll = _mock_collection()
    coll.find_one_and_update.return_value = None
    with patch.object(QuoteCollection, "get_motor_collection", return_value=coll):
        with pytest.raises(NotFoundError):
            asyncio.run(QuoteRepository().remove(USER_ID, QuoteEntry(category="fun", text="nope")))


def test_database_failure_becomes_persistence_error():
    coll = _mock_collection()
    coll.find_one.side_effect = ServerSelectionTimeoutError("no servers")
    with patch.object(QuoteCollection, "get_motor_collection", return_value=coll):
        with pytest.raises(PersistenceError):
            asyncio.run(QuoteRepository().list(USER_ID))


def test_invalid_user_id_is_rejected():
    with pytest.raises(ValidationError):
        asyncio.run(QuoteRepository().list("not-an-object-id"))


def test_uninitialized_database_becomes_persistence_error():
    with patch.object(
        QuoteCollection, "get_motor_collection", side_effect=CollectionWasNotInitialized("quotes")
    ):
        with pytest.raises(PersistenceError) as exc:
            asyncio.run(QuoteRepository().list(USER_ID))
    assert exc.value.message == "Database is not available"
