from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from quizbook.api import deps
from quizbook.catalog import QuizCatalog
from quizbook.loader import load_quiz_file
from quizbook.main import app
from quizbook.schemas.question import QuestionSet
from quizbook.session import SessionStore

QUIZ_DIR = Path(__file__).parent / "data" / "quizzes"


@pytest.fixture
def quiz_dir() -> Path:
    return QUIZ_DIR


@pytest.fixture
def basics() -> QuestionSet:
    return load_quiz_file(QUIZ_DIR / "basics.toml")


@pytest.fixture
async def catalog(quiz_dir: Path) -> QuizCatalog:
    catalog = QuizCatalog(quiz_dir)
    await catalog.startup()
    return catalog


@pytest.fixture
async def test_client(catalog: QuizCatalog) -> AsyncGenerator[AsyncClient, None]:
    """client wired to the sample quizzes, rate limiting off"""
    store = SessionStore(max_sessions=8)

    deps.speedlimiter = None
    app.dependency_overrides[deps.get_catalog_dependency] = lambda: catalog
    app.dependency_overrides[deps.get_session_store_dependency] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
