"""Decoding of raw xcresulttool output into schema models."""

import json

from pydantic import BaseModel, ValidationError

from xcresult_check.errors import MalformedDocumentError


def decode_document[M: BaseModel](text: str, model_cls: type[M]) -> M:
    """Parse JSON text and validate it against ``model_cls``.

    Raises:
        MalformedDocumentError: If the text is not a JSON object of the
            expected shape

    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(
            f"{model_cls.__name__} is not valid JSON: {e}"
        ) from e

    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"{model_cls.__name__} must be a JSON object, got {type(data).__name__}"
        )

    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise MalformedDocumentError(
            f"{model_cls.__name__} has an unexpected shape: {e}"
        ) from e
