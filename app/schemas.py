"""Request payload schemas.

Every inbound payload goes through `validate` (or `parse`) before any store
access. Pydantic reports every failing field at once, and `format_errors`
turns those reports into the `{field, message}` list returned to clients, so a
UI can highlight all invalid fields in one round trip.
"""

from typing import Annotated, Any, Optional, TypeVar, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.errors import ValidationFailed
from app.models import Difficulty, Language

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_LABELS = {
    "name": "Name",
    "email": "Email",
    "password": "Password",
    "title": "Title",
    "description": "Description",
    "difficulty": "Difficulty",
    "language": "Language",
    "boilerplateCode": "Boilerplate code",
    "testCases": "Test cases",
    "input": "Input",
    "output": "Expected output",
    "isPublic": "Visibility",
    "order": "Order",
    "page": "Page",
    "limit": "Limit",
}

# Location prefixes FastAPI adds to request validation errors.
_REQUEST_PARTS = ("body", "query", "path")


def _label(name: str) -> str:
    return _LABELS.get(name, _LABELS.get(to_camel(name), name))


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please enter a valid email address")
    # Lookups are exact, so keep what the caller sent.
    return value


EmailAddress = Annotated[StrictStr, Field(min_length=1), AfterValidator(_check_email)]


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(_Schema):
    email: EmailAddress
    password: StrictStr = Field(min_length=1)


class RegisterRequest(_Schema):
    name: StrictStr = Field(min_length=1, max_length=100)
    email: EmailAddress
    password: StrictStr = Field(min_length=8, max_length=128)


class TestCaseIn(_Schema):
    __test__ = False  # not a pytest class

    id: Optional[StrictStr] = None  # sent back by editors, ignored on write
    input: StrictStr
    output: StrictStr = Field(min_length=1)
    is_public: StrictBool = False
    order: Optional[StrictInt] = Field(None, ge=0)


class QuestionCreate(_Schema):
    title: StrictStr = Field(min_length=1, max_length=200)
    description: StrictStr = Field(min_length=1)
    difficulty: Difficulty = Difficulty.MEDIUM
    language: Language = Language.C
    boilerplate_code: Optional[StrictStr] = None
    test_cases: list[TestCaseIn] = Field(min_length=1)


class QuestionUpdate(_Schema):
    """Partial update. A present `testCases` replaces the whole set."""

    title: Optional[StrictStr] = Field(None, min_length=1, max_length=200)
    description: Optional[StrictStr] = Field(None, min_length=1)
    difficulty: Optional[Difficulty] = None
    language: Optional[Language] = None
    boilerplate_code: Optional[StrictStr] = None
    test_cases: Optional[list[TestCaseIn]] = Field(None, min_length=1)

    @field_validator("title", "description", "difficulty", "language", "test_cases", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise ValueError(f"{_label(info.field_name)} cannot be null")
        return value

    def field_changes(self) -> dict[str, Any]:
        """Scalar columns the caller supplied, keyed by column name."""
        changes = self.model_dump(exclude_unset=True, exclude={"test_cases"})
        for key in ("difficulty", "language"):
            if key in changes:
                changes[key] = changes[key].value
        return changes


class ListQuestionsQuery(_Schema):
    search: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    language: Optional[Language] = None
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)


def _field_path(loc: tuple) -> str:
    parts = list(loc)
    if parts and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


def _message(error: dict) -> str:
    kind = error["type"]
    ctx = error.get("ctx") or {}
    names = [part for part in error["loc"] if isinstance(part, str)]
    name = names[-1] if names else ""
    label = _label(name)

    if name == "testCases" and kind in ("missing", "too_short"):
        return "At least one test case is required"
    if kind == "missing":
        return f"{label} is required"
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is required"
        return f"{label} must be at least {ctx['min_length']} characters"
    if kind == "string_too_long":
        return f"{label} must be {ctx['max_length']} characters or less"
    if kind == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error["msg"]


def format_errors(errors: list[dict]) -> list[dict]:
    return [{"field": _field_path(error["loc"]), "message": _message(error)} for error in errors]


def validate(schema: type[SchemaT], payload: Any) -> Union[SchemaT, list[dict]]:
    """Return the parsed model, or every field error found in `payload`."""
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        return format_errors(e.errors())


def parse(schema: type[SchemaT], payload: Any, message: str | None = None) -> SchemaT:
    result = validate(schema, payload)
    if isinstance(result, list):
        raise ValidationFailed(result, message)
    return result
