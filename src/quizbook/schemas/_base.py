from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class QuestionType(StrEnum):
    MULTIPLE_CHOICE = "MultipleChoice"
    TRACING = "Tracing"


LineNumber = Annotated[StrictInt, Field(ge=1)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DefinitionModel(CamelModel):
    """Base of everything read from a quiz definition.

    Unknown keys are rejected so that a typo in a definition file never
    silently drops a field.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")


class SubmissionModel(CamelModel):
    model_config = ConfigDict(extra="forbid")
