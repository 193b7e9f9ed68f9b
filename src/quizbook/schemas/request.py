from typing import Any

from ._base import CamelModel


class GradeSubmit(CamelModel):
    question_id: str
    # shape depends on the question type, checked by the grader
    submission: dict[str, Any]


class SessionStartSubmit(CamelModel):
    quiz: str
