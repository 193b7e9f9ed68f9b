from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from limits import RateLimitItem
from limits import parse as parse_limit
from limits.aio.storage import MemoryStorage
from limits.aio.strategies import RateLimiter, SlidingWindowCounterRateLimiter

from quizbook.catalog import QuizCatalog
from quizbook.config import settings
from quizbook.schemas.question import QuestionSet
from quizbook.session import QuizSession, SessionStore
from quizbook.utils.speedlimit import get_ipaddr, get_remote_address

# global vars for injection
catalog: QuizCatalog | None = None
session_store: SessionStore = SessionStore(settings.max_sessions)
speedlimiter: RateLimiter | None = SlidingWindowCounterRateLimiter(MemoryStorage())
speedlimit_descriptor: RateLimitItem = parse_limit(settings.grade_rate_limit)


def get_catalog_dependency() -> QuizCatalog:
    if catalog is None:
        raise RuntimeError("inject catalog first")
    return catalog


CatalogDep = Annotated[QuizCatalog, Depends(get_catalog_dependency)]


def get_session_store_dependency() -> SessionStore:
    return session_store


SessionStoreDep = Annotated[SessionStore, Depends(get_session_store_dependency)]


def get_question_set(catalog: CatalogDep, name: str) -> QuestionSet:
    if (question_set := catalog.get(name)) is None:
        raise HTTPException(404, f"quiz {name} does not exist")
    return question_set


QuestionSetDep = Annotated[QuestionSet, Depends(get_question_set)]


def get_quiz_session(store: SessionStoreDep, session_id: UUID) -> QuizSession:
    if (session := store.get(session_id)) is None:
        raise HTTPException(404, f"session {session_id} does not exist")
    return session


QuizSessionDep = Annotated[QuizSession, Depends(get_quiz_session)]


async def _speedlimit_entrance(request: Request) -> Request:
    if speedlimiter is None:
        return request

    if await speedlimiter.hit(
        speedlimit_descriptor,
        get_remote_address(request),
        get_ipaddr(request),
    ):
        return request
    else:
        raise HTTPException(429, "too many requests, slow down")


SpeedLimReqDep = Depends(_speedlimit_entrance)
