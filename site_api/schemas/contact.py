from typing import Any

from pydantic import BaseModel, Field

from ..exceptions.contact import InvalidEmailError, MissingFieldError
from ..utils.email import check_email_shape


NAME_MAX_LENGTH = 120
EMAIL_MAX_LENGTH = 180
MESSAGE_MAX_LENGTH = 5000

HONEYPOT_FIELD = "_honey"
TURNSTILE_FIELD = "cf-turnstile-response"
REDIRECT_FIELD = "_redirect"


def _is_set(value: Any) -> bool:
    """Only null, false, 0, NaN and "" are unset. Empty lists and objects are set."""

    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0
    return True


def _to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join("" if item is None else _to_string(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text(value: Any) -> str:
    return _to_string(value) if _is_set(value) else ""


def _clean(value: Any, max_length: int) -> str:
    return _text(value).strip()[:max_length]


class Submission(BaseModel):
    name: str = Field(max_length=NAME_MAX_LENGTH, description="Full name of the sender")
    email: str = Field(max_length=EMAIL_MAX_LENGTH, description="Email of the sender")
    message: str = Field(max_length=MESSAGE_MAX_LENGTH, description="Content of the message")
    turnstile_response: str = Field("", description="Turnstile response")
    redirect: str = Field("", description="URL to redirect to after a successful submission")

    @classmethod
    def from_form(cls, data: dict[str, Any]) -> "Submission":
        """
        Build a submission from a parsed form body.

        Fields are trimmed and clipped before they are checked, so an oversized value is shortened, not rejected.
        """

        name = _clean(data.get("name"), NAME_MAX_LENGTH)
        email = _clean(data.get("email"), EMAIL_MAX_LENGTH)
        message = _clean(data.get("message"), MESSAGE_MAX_LENGTH)
        if not name or not email or not message:
            raise MissingFieldError
        if not check_email_shape(email):
            raise InvalidEmailError

        return cls(
            name=name,
            email=email,
            message=message,
            turnstile_response=_text(data.get(TURNSTILE_FIELD)),
            redirect=_text(data.get(REDIRECT_FIELD)),
        )


def is_honeypot_filled(data: dict[str, Any]) -> bool:
    return _is_set(data.get(HONEYPOT_FIELD))
