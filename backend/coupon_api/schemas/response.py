"""Uniform response envelope returned by every coupon endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIResponse(BaseModel):
    """Envelope serialized as ``{isSuccess, statusCode, result, errorMessages}``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_success: bool = False
    status_code: int = 400
    result: Any = None
    error_messages: list[str] = Field(default_factory=list)

    def to_content(self) -> dict[str, Any]:
        """Return the JSON-ready body with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def ok(result: Any = None, status_code: int = 200) -> APIResponse:
    """Build a success envelope."""
    return APIResponse(is_success=True, status_code=status_code, result=result)


def fail(*messages: str, status_code: int = 400) -> APIResponse:
    """Build a failure envelope carrying ``messages`` in order."""
    return APIResponse(is_success=False, status_code=status_code, error_messages=list(messages))
