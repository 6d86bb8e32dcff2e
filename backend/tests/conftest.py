# 테스트 공통 설정
# - quote_api 패키지를 임포트하기 전에 환경변수를 먼저 설정합니다.
# - 라우트 테스트는 MongoDB/OpenAI 대신 메모리 저장소와 가짜 생성기를 주입합니다.

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-not-real")
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from types import SimpleNamespace
from typing import List

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from quote_api.core.exceptions import ConflictError, NotFoundError
from quote_api.models.quote import QuoteEntry
from quote_api.services.quote_generator import QuoteGenerator


class InMemoryUserRepository:
    def __init__(self):
        self.users = {}

    async def get_by_email(self, email):
        return self.users.get(email)

    async def create(self, email, hashed_password):
        # unique 인덱스와 같은 동작
        if email in self.users:
            raise ConflictError("Email already in use")
        user = SimpleNamespace(id=ObjectId(), email=email, hashed_password=hashed_password)
        self.users[email] = user
        return user


class InMemoryQuoteRepository:
    def __init__(self):
        self.collections = {}

    async def append(self, user_id, entries) -> List[QuoteEntry]:
        self.collections.setdefault(user_id, []).extend(entries)
        return list(self.collections[user_id])

    async def list(self, user_id) -> List[QuoteEntry]:
        return list(self.collections.get(user_id, []))

    async def remove(self, user_id, target) -> int:
        current = self.collections.get(user_id, [])
        kept = [q for q in current if (q.category, q.text) != (target.category, target.text)]
        removed = len(current) - len(kept)
        if removed == 0:
            raise NotFoundError("Quote not found")
        self.collections[user_id] = kept
        return removed


class StubQuoteGenerator(QuoteGenerator):
    def __init__(self, text="Keep going."):
        self.text = text
        self.calls = []

    def complete(self, instructions, user_input):
        self.calls.append((instructions, user_input))
        return self.text


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def quote_repo():
    return InMemoryQuoteRepository()


@pytest.fixture
def generator():
    return StubQuoteGenerator()


@pytest.fixture
def client(user_repo, quote_repo, generator):
    # with 블록 없이 생성하므로 startup 이벤트(MongoDB 연결)는 실행되지 않습니다
    from quote_api.main import app
    from quote_api.services.auth_service import get_user_repository
    from quote_api.services.quote_service import get_quote_repository
    from quote_api.services.quote_generator import get_quote_generator

    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_quote_repository] = lambda: quote_repo
    app.dependency_overrides[get_quote_generator] = lambda: generator
    yield TestClient(app)
    app.dependency_overrides.clear()
