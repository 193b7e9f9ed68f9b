from collections.abc import Mapping
from typing import Annotated, Any, Literal, Self

from pydantic import Field, PrivateAttr, StrictBool, StrictStr, model_validator

from quizbook.exceptions import UnknownQuestionError

from ._base import DefinitionModel, LineNumber, QuestionType


def _duplicates(items: tuple[str, ...]) -> list[str]:
    seen: set[str] = set()
    dups: list[str] = []
    for item in items:
        if item in seen and item not in dups:
            dups.append(item)
        seen.add(item)
    return dups


class MultipleChoicePrompt(DefinitionModel):
    prompt: StrictStr
    code: StrictStr | None = None
    distractors: tuple[StrictStr, ...]
    sort_answers: StrictBool = False


class MultipleChoiceAnswer(DefinitionModel):
    # a tuple marks a question with several correct choices
    answer: StrictStr | tuple[StrictStr, ...]


class MultipleChoice(DefinitionModel):
    id: StrictStr
    type: Literal["MultipleChoice"]
    prompt: MultipleChoicePrompt
    answer: MultipleChoiceAnswer
    context: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def _hoist_distractors(cls, data: Any) -> Any:
        # distractors may be declared under either `prompt` or `answer`
        if not isinstance(data, Mapping):
            return data
        answer = data.get("answer")
        if not isinstance(answer, Mapping) or "distractors" not in answer:
            return data
        prompt = data.get("prompt")
        if isinstance(prompt, Mapping) and "distractors" in prompt:
            raise ValueError(
                "distractors are declared in both `prompt` and `answer`"
            )
        answer = dict(answer)
        prompt = dict(prompt) if isinstance(prompt, Mapping) else {}
        prompt["distractors"] = answer.pop("distractors")
        return {**data, "prompt": prompt, "answer": answer}

    @model_validator(mode="after")
    def _check_choices(self) -> Self:
        answers = self.answers
        if not answers:
            raise ValueError("answer list must not be empty")
        if dups := _duplicates(answers):
            raise ValueError(f"answer repeated: {dups!r}")
        distractors = self.prompt.distractors
        if dups := _duplicates(distractors):
            raise ValueError(f"distractor repeated: {dups!r}")
        if overlap := [a for a in answers if a in distractors]:
            raise ValueError(f"answer duplicates a distractor: {overlap!r}")
        return self

    @property
    def answers(self) -> tuple[str, ...]:
        answer = self.answer.answer
        return answer if isinstance(answer, tuple) else (answer,)

    @property
    def multiple(self) -> bool:
        return isinstance(self.answer.answer, tuple)

    @property
    def question_type(self) -> QuestionType:
        return QuestionType.MULTIPLE_CHOICE


class TracingPrompt(DefinitionModel):
    program: StrictStr


class TracingAnswer(DefinitionModel):
    does_compile: StrictBool
    line_number: LineNumber | None = None
    stdout: StrictStr | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> Self:
        if self.does_compile:
            if self.stdout is None:
                raise ValueError("doesCompile = true requires stdout")
            if self.line_number is not None:
                raise ValueError("lineNumber is only allowed when doesCompile = false")
        else:
            if self.line_number is None:
                raise ValueError("doesCompile = false requires lineNumber")
            if self.stdout is not None:
                raise ValueError("stdout is only allowed when doesCompile = true")
        return self


class Tracing(DefinitionModel):
    id: StrictStr
    type: Literal["Tracing"]
    prompt: TracingPrompt
    answer: TracingAnswer
    context: StrictStr = ""

    @model_validator(mode="after")
    def _check_line_in_program(self) -> Self:
        line = self.answer.line_number
        if line is not None and line > (n := len(self.prompt.program.splitlines())):
            raise ValueError(f"lineNumber {line} is past the end of the program ({n} lines)")
        return self

    @property
    def question_type(self) -> QuestionType:
        return QuestionType.TRACING


Question = Annotated[MultipleChoice | Tracing, Field(discriminator="type")]


class QuestionSet(DefinitionModel):
    name: str
    questions: tuple[Question, ...]

    _by_id: dict[str, MultipleChoice | Tracing] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> Self:
        if dups := _duplicates(tuple(q.id for q in self.questions)):
            raise ValueError(f"duplicate question id: {dups!r}")
        return self

    def model_post_init(self, __context: Any) -> None:
        self._by_id = {q.id: q for q in self.questions}

    def get(self, question_id: str) -> MultipleChoice | Tracing:
        try:
            return self._by_id[question_id]
        except KeyError:
            raise UnknownQuestionError(question_id) from None

    def ids(self) -> list[str]:
        return [q.id for q in self.questions]

    @property
    def count(self) -> int:
        return len(self.questions)
