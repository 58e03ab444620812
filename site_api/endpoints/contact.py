"""Endpoint for the website contact form"""

from fastapi import APIRouter, Depends, Request, Response

from ..exceptions.contact import (
    CaptchaFailedError,
    CaptchaMissingError,
    InvalidEmailError,
    MailTransportError,
    MalformedBodyError,
    MissingFieldError,
    UnsupportedContentTypeError,
)
from ..services.contact import ContactHandler
from ..utils.docs import responses


router = APIRouter(tags=["contact"])


def get_contact_handler(request: Request) -> ContactHandler:
    handler = getattr(request.app.state, "contact_handler", None)
    if handler is None:
        raise RuntimeError("ContactHandler not initialized. Check create_app.")
    return handler


@router.post(
    "/contact",
    response_class=Response,
    responses=responses(
        "Message accepted",
        UnsupportedContentTypeError,
        MalformedBodyError,
        MissingFieldError,
        InvalidEmailError,
        CaptchaMissingError,
        CaptchaFailedError,
        MailTransportError,
    ),
)
async def send_message(request: Request, handler: ContactHandler = Depends(get_contact_handler)) -> Response:
    """
    Send a message to the site owner.

    Accepts `application/x-www-form-urlencoded` or `application/json` with the fields `name`, `email` and
    `message`. A `cf-turnstile-response` is required if Turnstile is enabled. If `_redirect` points to the
    allowed origin, the response is a `303` redirect to it. Submissions that look automated are accepted
    without being delivered.
    """

    return await handler.handle(request)


@router.options("/contact", include_in_schema=False)
async def preflight(request: Request, handler: ContactHandler = Depends(get_contact_handler)) -> Response:
    return await handler.handle(request)


@router.api_route(
    "/contact",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def method_not_allowed(request: Request, handler: ContactHandler = Depends(get_contact_handler)) -> Response:
    return await handler.handle(request)
