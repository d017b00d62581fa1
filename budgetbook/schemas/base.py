from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from budgetbook.exceptions.http import ValidationError


class RequestModel(BaseModel):
    """Base for input schemas. Strips surrounding whitespace from every string field."""

    model_config = ConfigDict(str_strip_whitespace=True)

    @classmethod
    def build(cls, **data: Any) -> Self:
        """
        Validates raw input, raising the domain ValidationError (one message per
        failed field) instead of pydantic's.
        """
        try:
            return cls(**data)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc
