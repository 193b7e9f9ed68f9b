from typing import Self

from pydantic import StrictBool, StrictStr, model_validator

from ._base import LineNumber, SubmissionModel


class MultipleChoiceSubmission(SubmissionModel):
    answer: StrictStr | tuple[StrictStr, ...]


class TracingSubmission(SubmissionModel):
    does_compile: StrictBool
    line_number: LineNumber | None = None
    stdout: StrictStr | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> Self:
        if self.does_compile and (self.stdout is None or self.line_number is not None):
            raise ValueError("doesCompile = true takes stdout and no lineNumber")
        if not self.does_compile and (self.line_number is None or self.stdout is not None):
            raise ValueError("doesCompile = false takes lineNumber and no stdout")
        return self


Submission = MultipleChoiceSubmission | TracingSubmission
