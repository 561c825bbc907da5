"""
Pydantic-backed payload checking shared by every validator

Request schemas in ``carelink.schemas`` carry the field constraints; the
helpers here run them and turn ``pydantic.ValidationError`` details into the
plain messages returned to clients.
"""
from datetime import datetime, timezone
from typing import Annotated, Iterable, List, Optional, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_snake

from carelink.core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Field name -> label used in messages; other fields are humanized
FIELD_LABELS = {
    "metric_type": "Metric type",
    "recorded_at": "Recorded date",
    "start_date": "Start date",
    "end_date": "End date",
    "prescribed_by": "Prescribing doctor",
    "group_id": "Group ID",
    "announcement_id": "Announcement ID",
    "facility_id": "Facility ID",
    "review_id": "Review ID",
    "goal_ids": "Goal IDs",
    "category_ids": "Category IDs",
    "other_user_id": "Other user ID",
    "doctor_id": "Doctor ID",
    "image_url": "Image URL",
    "phone": "Phone number",
    "email": "Email address",
    "patient_email": "Patient email",
    "invite_token": "Invite token",
    "duration_minutes": "Duration",
}

_TEMPLATES = {
    "missing": "{label} is required",
    "string_too_long": "{label} cannot exceed {max_length} characters",
    "string_type": "{label} must be a string",
    "literal_error": "{label} must be one of: {expected}",
    "enum": "{label} must be one of: {expected}",
    "int_type": "{label} must be an integer",
    "int_parsing": "{label} must be an integer",
    "int_from_float": "{label} must be an integer",
    "float_type": "{label} must be a number",
    "float_parsing": "{label} must be a number",
    "bool_type": "{label} must be true or false",
    "bool_parsing": "{label} must be true or false",
    "greater_than": "{label} must be greater than {gt}",
    "greater_than_equal": "{label} must be at least {ge}",
    "less_than_equal": "{label} must be at most {le}",
    "list_type": "{label} must be a list",
    "too_short": "{label} must contain at least {min_length} item(s)",
    "date_type": "{label} must be a valid date",
    "date_parsing": "{label} must be a valid date",
    "date_from_datetime_parsing": "{label} must be a valid date",
    "date_from_datetime_inexact": "{label} must be a valid date",
    "datetime_type": "{label} must be a valid date",
    "datetime_parsing": "{label} must be a valid date",
    "datetime_from_date_parsing": "{label} must be a valid date",
}

_VALUE_ERROR_PREFIX = "Value error, "

# Request parts FastAPI puts in front of the field name
_LOCATIONS = ("body", "query", "path", "header", "cookie")


def field_label(name: str) -> str:
    snake = to_snake(name)
    return FIELD_LABELS.get(snake, snake.replace("_", " ").capitalize())


def _field_of(error: dict) -> Optional[str]:
    for part in error.get("loc", ()):
        if isinstance(part, str) and part not in _LOCATIONS:
            return part
    return None


def error_message(error: dict) -> str:
    """One client-facing message for one pydantic error detail"""
    kind = error.get("type")
    message = error.get("msg", "")
    field = _field_of(error)
    ctx = error.get("ctx") or {}

    if kind == "value_error":
        if message.startswith(_VALUE_ERROR_PREFIX):
            return message[len(_VALUE_ERROR_PREFIX):]
        if field:
            # Library validators such as EmailStr report their own wording
            return f"Please enter a valid {field_label(field).lower()}"
        return message

    if field is None:
        return message

    label = field_label(field)
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is required"
        return f"{label} must be at least {ctx.get('min_length')} characters"

    template = _TEMPLATES.get(kind)
    if template is None:
        return f"{label}: {message}"
    return template.format(label=label, **ctx)


def error_messages(errors: Iterable[dict]) -> List[str]:
    messages = []
    for error in errors:
        message = error_message(error)
        if message not in messages:
            messages.append(message)
    return messages


def parse_payload(schema: Type[SchemaT], payload: dict, **context) -> SchemaT:
    """Validate ``payload`` against ``schema``; raise ValidationError with messages"""
    try:
        return schema.model_validate(payload, context=context or None)
    except PydanticValidationError as exc:
        raise ValidationError(errors=error_messages(exc.errors()))


def collect_errors(schema: Type[BaseModel], payload: dict, **context) -> List[str]:
    """Messages for every problem in ``payload``; empty when it is valid"""
    try:
        schema.model_validate(payload, context=context or None)
    except PydanticValidationError as exc:
        return error_messages(exc.errors())
    return []


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# ISO timestamps, "Z" included, stored as naive UTC
UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


def now_from(info) -> datetime:
    """Reference time passed as validation context, or the current time"""
    context = info.context or {}
    return context.get("now") or datetime.utcnow()
