import logging
import random
from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import dataclass
from uuid import UUID, uuid4

from quizbook.grading import RawSubmission, grade, parse_submission, present_choices
from quizbook.schemas.question import MultipleChoice, QuestionSet, Tracing
from quizbook.schemas.response import (
    AnswerRecordResponse,
    GradeResult,
    QuestionView,
    SessionSummaryResponse,
)
from quizbook.schemas.submission import (
    MultipleChoiceSubmission,
    Submission,
    TracingSubmission,
)

logger = logging.getLogger("uvicorn.error")


def question_view(
    question: MultipleChoice | Tracing, choices: list[str] | None = None
) -> QuestionView:
    if isinstance(question, Tracing):
        return QuestionView(
            id=question.id, type=question.question_type, program=question.prompt.program
        )
    return QuestionView(
        id=question.id,
        type=question.question_type,
        prompt=question.prompt.prompt,
        code=question.prompt.code,
        choices=choices if choices is not None else present_choices(question),
        multiple=question.multiple,
    )


@dataclass(frozen=True)
class AnswerRecord:
    submission: Submission
    result: GradeResult


class QuizSession:
    """The transient state of one attempt at a quiz.

    The question set is shared read-only; only the response map belongs to
    the session. Choice order is drawn once per question so that a learner
    sees the same order every time the question is shown.
    """

    def __init__(
        self,
        question_set: QuestionSet,
        *,
        shuffle: bool = False,
        seed: int | None = None,
        session_id: UUID | None = None,
    ):
        self.id = session_id or uuid4()
        self.question_set = question_set
        self._shuffle = shuffle
        self._rng = random.Random(seed)
        self._choices: dict[str, list[str]] = {}
        self._responses: dict[str, AnswerRecord] = {}

    def choices(self, question: MultipleChoice) -> list[str]:
        if question.id not in self._choices:
            self._choices[question.id] = present_choices(
                question, shuffle=self._shuffle, rng=self._rng
            )
        return list(self._choices[question.id])

    def view(self, question_id: str) -> QuestionView:
        question = self.question_set.get(question_id)
        if isinstance(question, MultipleChoice):
            return question_view(question, self.choices(question))
        return question_view(question)

    def views(self) -> list[QuestionView]:
        return [self.view(qid) for qid in self.question_set.ids()]

    def submit(
        self, question_id: str, submission: Submission | RawSubmission
    ) -> GradeResult:
        question = self.question_set.get(question_id)
        if not isinstance(submission, MultipleChoiceSubmission | TracingSubmission):
            submission = parse_submission(question, submission)
        result = grade(question, submission)
        # a resubmission replaces the earlier verdict
        self._responses[question_id] = AnswerRecord(submission, result)
        return result

    @property
    def responses(self) -> Mapping[str, AnswerRecord]:
        return self._responses

    def summary(self) -> SessionSummaryResponse:
        records = [
            AnswerRecordResponse(question_id=qid, correct=self._responses[qid].result.correct)
            for qid in self.question_set.ids()
            if qid in self._responses
        ]
        return SessionSummaryResponse(
            session_id=self.id,
            quiz=self.question_set.name,
            total=self.question_set.count,
            answered=len(records),
            correct=sum(r.correct for r in records),
            records=records,
        )


class SessionStore:
    def __init__(self, max_sessions: int = 1024):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[UUID, QuizSession] = OrderedDict()

    def create(
        self,
        question_set: QuestionSet,
        *,
        shuffle: bool = False,
        seed: int | None = None,
    ) -> QuizSession:
        session = QuizSession(question_set, shuffle=shuffle, seed=seed)
        while len(self._sessions) >= self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.warning("session store full, dropping session %s", evicted)
        self._sessions[session.id] = session
        return session

    def get(self, session_id: UUID) -> QuizSession | None:
        return self._sessions.get(session_id)

    def pop(self, session_id: UUID) -> QuizSession | None:
        return self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
