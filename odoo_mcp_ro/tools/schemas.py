"""
Argument models used to validate tool input before any Odoo call.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError


MAX_LIMIT = 1000


def _require_model_name(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("empty_model", "Model name cannot be empty")
    return value


ModelName = Annotated[str, AfterValidator(_require_model_name)]
DomainTerm = Union[Literal["&", "|", "!"], list[Any]]


class ToolArguments(BaseModel):
    """Base for tool argument models."""
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class SearchRecordsArgs(ToolArguments):
    model: ModelName
    domain: list[DomainTerm] = Field(default_factory=list)
    fields: Optional[list[str]] = None
    limit: Optional[Annotated[int, Field(ge=1, le=MAX_LIMIT)]] = None
    offset: Annotated[int, Field(ge=0)] = 0
    order: Optional[str] = None


class GetRecordArgs(ToolArguments):
    model: ModelName
    ids: Annotated[list[Annotated[int, Field(gt=0)]], Field(min_length=1)]
    fields: Optional[list[str]] = None

    @field_validator("ids", mode="before")
    @classmethod
    def wrap_single_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return [value]
        return value


class ListModelsArgs(ToolArguments):
    transient: bool = False


class GetModelFieldsArgs(ToolArguments):
    model: ModelName
    fields: Optional[list[str]] = None


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic error as 'path: message, path: message'."""
    parts = []
    for err in error.errors():
        path = ".".join(str(p) for p in err["loc"])
        parts.append(f"{path}: {err['msg']}" if path else err["msg"])
    return ", ".join(parts)
