import logging
import random
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from quizbook.api.deps import CatalogDep, QuestionSetDep, SpeedLimReqDep
from quizbook.config import settings
from quizbook.exceptions import UnknownQuestionError
from quizbook.grading import grade, present_choices
from quizbook.schemas.question import MultipleChoice
from quizbook.schemas.request import GradeSubmit
from quizbook.schemas.response import GradeResult, QuizMetaResponse, QuizResponse
from quizbook.session import question_view

router = APIRouter(tags=["quiz"])
logger = logging.getLogger("uvicorn.error")


@router.get("/list", summary="List available quizzes")
async def list_quizzes(catalog: CatalogDep) -> list[QuizMetaResponse]:
    return catalog.list_quizzes()


@router.get(
    "/{name}",
    summary="Get a quiz",
    description="""Answers are left out; choices keep the definition order unless shuffling is enabled""",
)
async def get_quiz(question_set: QuestionSetDep) -> QuizResponse:
    rng = random.Random(settings.shuffle_seed)
    views = []
    for question in question_set.questions:
        if isinstance(question, MultipleChoice):
            choices = present_choices(
                question, shuffle=settings.shuffle_choices, rng=rng
            )
            views.append(question_view(question, choices))
        else:
            views.append(question_view(question))
    return QuizResponse(name=question_set.name, questions=views)


@router.post(
    "/{name}/grade", summary="Grade one answer", description="""Nothing is recorded"""
)
async def grade_one(
    question_set: QuestionSetDep,
    submit: GradeSubmit = Body(),
    _: Any = SpeedLimReqDep,
) -> GradeResult:
    try:
        question = question_set.get(submit.question_id)
    except UnknownQuestionError as e:
        raise HTTPException(404, str(e)) from e
    result = grade(question, submit.submission)
    logger.debug(
        "graded %s/%s: %s", question_set.name, question.id, result.correct
    )
    return result
