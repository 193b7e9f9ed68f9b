from uuid import UUID

from pydantic import Field

from ._base import CamelModel, QuestionType


class GradeResult(CamelModel):
    correct: bool
    explanation: str


class QuestionView(CamelModel):
    """A question as shown to the learner, without its answer."""

    id: str
    type: QuestionType
    prompt: str | None = None
    code: str | None = None
    program: str | None = None
    choices: list[str] | None = None
    multiple: bool = False


class QuizMetaResponse(CamelModel):
    name: str
    count: int


class QuizResponse(CamelModel):
    name: str
    questions: list[QuestionView]


class SessionStartResponse(QuizResponse):
    session_id: UUID


class AnswerRecordResponse(CamelModel):
    question_id: str
    correct: bool


class SessionSummaryResponse(CamelModel):
    session_id: UUID
    quiz: str
    total: int
    answered: int
    correct: int
    records: list[AnswerRecordResponse] = Field(default_factory=list)
