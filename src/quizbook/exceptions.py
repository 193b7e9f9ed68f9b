class QuizError(Exception):
    "base of everything raised by quizbook"


class QuizValidationError(QuizError):
    """A quiz definition is malformed or breaks a question invariant.

    ``question_id`` and ``index`` identify the offending question when the
    failure can be pinned to one; both are ``None`` for file-level problems
    such as broken TOML.
    """

    def __init__(
        self,
        message: str,
        *,
        question_id: str | None = None,
        index: int | None = None,
        source: str | None = None,
    ):
        self.message = message
        self.question_id = question_id
        self.index = index
        self.source = source
        super().__init__(str(self))

    def __str__(self) -> str:
        where: list[str] = []
        if self.source is not None:
            where.append(self.source)
        if self.index is not None:
            where.append(f"question #{self.index}")
        if self.question_id is not None:
            where.append(f"id={self.question_id!r}")
        if not where:
            return self.message
        return f"{', '.join(where)}: {self.message}"


class InputShapeError(QuizError):
    "raised when a submitted answer does not fit the question type"


class UnknownQuestionError(QuizError, LookupError):
    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__(f"no question with id {question_id!r}")
