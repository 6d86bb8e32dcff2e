# 사용자 저장소 테스트 - 중복 이메일은 unique 인덱스 위반으로 판단
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from beanie.exceptions import CollectionWasNotInitialized
from pymongo.errors import DuplicateKeyError, AutoReconnect

from quote_api.core.exceptions import ConflictError, PersistenceError
from quote_api.repositories.user_repository import UserRepository


def _user_model(insert_side_effect=None):
    instance = MagicMock()
    instance.insert = AsyncMock(side_effect=insert_side_effect, return_value=instance)
    model = MagicMock(return_value=instance)
    return model, instance


def test_create_inserts_user():
    model, instance = _user_model()
    with patch("quote_api.repositories.user_repository.User", model):
        user = asyncio.run(UserRepository().create("a@x.com", "hashed"))
    assert user is instance
    model.assert_called_once_with(email="a@x.com", hashed_password="hashed")


def test_duplicate_email_raises_conflict():
    model, _ = _user_model(DuplicateKeyError("E11000 duplicate key error"))
    with patch("quote_api.repositories.user_repository.User", model):
        with pytest.raises(ConflictError):
            asyncio.run(UserRepository().create("a@x.com", "hashed"))


def test_other_database_errors_raise_persistence_error():
    model, _ = _user_model(AutoReconnect("connection lost"))
    with patch("quote_api.repositories.user_repository.User", model):
        with pytest.raises(PersistenceError) as exc:
            asyncio.run(UserRepository().create("a@x.com", "hashed"))
    assert exc.value.message == "Error creating user"


def test_email_is_declared_as_unique_index():
    # 중복 방지는 애플리케이션 조회가 아니라 이 인덱스에 의존합니다
    from quote_api.models.user import User

    annotation = User.model_fields["email"].annotation
    _, index_options = annotation._indexed
    assert index_options["unique"] is True
    assert User.Settings.name == "users"


def test_uninitialized_database_becomes_persistence_error():
    model = MagicMock(side_effect=CollectionWasNotInitialized("users"))
    with patch("quote_api.repositories.user_repository.User", model):
        with pytest.raises(PersistenceError):
            asyncio.run(UserRepository().create("a@x.com", "hashed"))
