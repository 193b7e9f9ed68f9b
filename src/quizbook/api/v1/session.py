from typing import Any

from fastapi import APIRouter, Body, HTTPException

from quizbook.api.deps import (
    CatalogDep,
    QuizSessionDep,
    SessionStoreDep,
    SpeedLimReqDep,
)
from quizbook.config import settings
from quizbook.exceptions import UnknownQuestionError
from quizbook.schemas.request import GradeSubmit, SessionStartSubmit
from quizbook.schemas.response import (
    GradeResult,
    SessionStartResponse,
    SessionSummaryResponse,
)

router = APIRouter(tags=["session"])


@router.post("/start", summary="Start a quiz attempt")
async def start(
    catalog: CatalogDep,
    store: SessionStoreDep,
    submit: SessionStartSubmit = Body(),
    _: Any = SpeedLimReqDep,
) -> SessionStartResponse:
    if (question_set := catalog.get(submit.quiz)) is None:
        raise HTTPException(404, f"quiz {submit.quiz} does not exist")
    session = store.create(
        question_set, shuffle=settings.shuffle_choices, seed=settings.shuffle_seed
    )
    return SessionStartResponse(
        session_id=session.id, name=question_set.name, questions=session.views()
    )


@router.post("/{session_id}/answer", summary="Submit an answer")
async def answer(
    session: QuizSessionDep,
    submit: GradeSubmit = Body(),
    _: Any = SpeedLimReqDep,
) -> GradeResult:
    try:
        return session.submit(submit.question_id, submit.submission)
    except UnknownQuestionError as e:
        raise HTTPException(404, str(e)) from e


@router.post(
    "/{session_id}/finish",
    summary="Finish a quiz attempt",
    description="""Returns the verdicts of the attempt, then discards the session""",
)
async def finish(
    session: QuizSessionDep, store: SessionStoreDep
) -> SessionSummaryResponse:
    summary = session.summary()
    store.pop(session.id)
    return summary
