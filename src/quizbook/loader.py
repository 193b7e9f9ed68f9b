"""Quiz definition loading.

A quiz definition is a TOML document holding a ``[[questions]]`` array of
tables. Loading either yields an immutable :class:`QuestionSet` or raises a
:class:`QuizValidationError` naming the first offending question; nothing is
ever repaired on the author's behalf.
"""

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from quizbook.exceptions import QuizValidationError
from quizbook.schemas.question import MultipleChoice, Question, QuestionSet, Tracing

logger = logging.getLogger("uvicorn.error")

_question_adapter: TypeAdapter[MultipleChoice | Tracing] = TypeAdapter(Question)


def _describe(e: ValidationError) -> str:
    parts: list[str] = []
    for err in e.errors(include_url=False):
        loc = ".".join(str(x) for x in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def _parse_question(
    raw: Any, index: int, source: str | None
) -> MultipleChoice | Tracing:
    question_id = None
    if isinstance(raw, Mapping):
        question_id = raw.get("id") if isinstance(raw.get("id"), str) else None
    try:
        return _question_adapter.validate_python(raw)
    except ValidationError as e:
        raise QuizValidationError(
            _describe(e), question_id=question_id, index=index, source=source
        ) from e


def load_question_set(
    data: Mapping[str, Any], name: str, *, source: str | None = None
) -> QuestionSet:
    if not isinstance(data, Mapping):
        raise QuizValidationError("quiz definition must be a table", source=source)
    raw_questions = data.get("questions")
    if not isinstance(raw_questions, list):
        raise QuizValidationError(
            "quiz definition needs a `questions` array of tables", source=source
        )

    questions: list[MultipleChoice | Tracing] = []
    seen: dict[str, int] = {}
    for index, raw in enumerate(raw_questions):
        question = _parse_question(raw, index, source)
        if question.id in seen:
            raise QuizValidationError(
                f"duplicate id, first used by question #{seen[question.id]}",
                question_id=question.id,
                index=index,
                source=source,
            )
        seen[question.id] = index
        questions.append(question)

    logger.debug("loaded quiz %r with %d questions", name, len(questions))
    return QuestionSet(name=name, questions=tuple(questions))


def loads_question_set(
    text: str, name: str, *, source: str | None = None
) -> QuestionSet:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise QuizValidationError(f"invalid TOML: {e}", source=source) from e
    return load_question_set(data, name, source=source)


def load_quiz_file(path: str | Path) -> QuestionSet:
    path = Path(path)
    return loads_question_set(
        path.read_text(encoding="utf-8"), path.stem, source=str(path)
    )
