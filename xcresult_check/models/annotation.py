"""Models for GitHub Check Run annotations."""

from typing import Literal, Self

from pydantic import Field, PositiveInt, model_validator

from xcresult_check.models.base import Model

AnnotationLevel = Literal["notice", "warning", "failure"]


class GitHubAnnotation(Model):
    """Annotation anchoring a message to a file and line range."""

    path: str = Field(..., description="Repository-relative file path")
    start_line: PositiveInt
    end_line: PositiveInt
    annotation_level: AnnotationLevel
    title: str
    message: str

    @model_validator(mode="after")
    def _check_line_range(self) -> Self:
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) precedes start_line ({self.start_line})"
            )
        return self
