import random
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from quizbook.exceptions import InputShapeError
from quizbook.schemas.question import MultipleChoice, Tracing
from quizbook.schemas.response import GradeResult
from quizbook.schemas.submission import (
    MultipleChoiceSubmission,
    Submission,
    TracingSubmission,
)


def present_choices(
    question: MultipleChoice,
    shuffle: bool = False,
    rng: random.Random | None = None,
) -> list[str]:
    """Candidate strings of a multiple-choice question in presentation order.

    Answers come first, then distractors, both in declaration order. A
    question declaring ``sortAnswers`` is shown sorted instead. Shuffling is
    opt-in; pass a seeded ``rng`` to make it reproducible.
    """
    if not isinstance(question, MultipleChoice):
        raise InputShapeError(f"question {question.id!r} has no choices")
    choices = [*question.answers, *question.prompt.distractors]
    if question.prompt.sort_answers:
        choices.sort()
    elif shuffle:
        (rng or random.Random()).shuffle(choices)
    return choices


RawSubmission = Mapping[str, Any] | str | list[str] | tuple[str, ...]


def parse_submission(
    question: MultipleChoice | Tracing, payload: RawSubmission
) -> Submission:
    """Validate a raw submission against the question type.

    A multiple-choice answer may also be given bare, as the chosen text or a
    list of chosen texts.
    """
    if isinstance(payload, str | list | tuple):
        if not isinstance(question, MultipleChoice):
            raise InputShapeError(
                f"{type(payload).__name__} cannot answer "
                f"{question.question_type} question {question.id!r}"
            )
        payload = {"answer": payload}
    model: type[Submission] = (
        MultipleChoiceSubmission
        if isinstance(question, MultipleChoice)
        else TracingSubmission
    )
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InputShapeError(
            f"submission does not fit {question.question_type} question "
            f"{question.id!r}: {e.error_count()} error(s)"
        ) from e


def _grade_multiple_choice(
    question: MultipleChoice, submission: MultipleChoiceSubmission
) -> bool:
    submitted = submission.answer
    if question.multiple != isinstance(submitted, tuple):
        expected = "a list of choices" if question.multiple else "a single choice"
        raise InputShapeError(f"question {question.id!r} expects {expected}")
    if isinstance(submitted, tuple):
        # repeated entries make the list differ from the declared answers
        return sorted(submitted) == sorted(question.answers)
    return submitted == question.answer.answer


def _grade_tracing(question: Tracing, submission: TracingSubmission) -> bool:
    expected = question.answer
    if submission.does_compile != expected.does_compile:
        return False
    if expected.does_compile:
        return submission.stdout == expected.stdout
    return submission.line_number == expected.line_number


def grade(
    question: MultipleChoice | Tracing,
    submission: Submission | RawSubmission,
) -> GradeResult:
    if not isinstance(submission, MultipleChoiceSubmission | TracingSubmission):
        submission = parse_submission(question, submission)

    match question, submission:
        case MultipleChoice(), MultipleChoiceSubmission():
            correct = _grade_multiple_choice(question, submission)
        case Tracing(), TracingSubmission():
            correct = _grade_tracing(question, submission)
        case _:
            raise InputShapeError(
                f"{type(submission).__name__} cannot answer "
                f"{question.question_type} question {question.id!r}"
            )
    return GradeResult(correct=correct, explanation=question.context)
