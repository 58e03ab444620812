"""Contact form pipeline: parse, filter, verify, deliver."""

from fastapi import Response, status
from starlette.requests import Request

from ..exceptions.contact import CaptchaFailedError, CaptchaMissingError, MethodNotAllowedError
from ..logger import get_logger
from ..schemas.contact import Submission, is_honeypot_filled
from ..settings import Settings
from ..utils.body import decode_body, parse_body, read_body
from ..utils.email import CONTACT_MESSAGE, Mailer
from ..utils.spam import is_spam
from ..utils.turnstile import TurnstileVerifier, client_ip


logger = get_logger(__name__)


class ContactHandler:
    def __init__(self, settings: Settings, mailer: Mailer, verifier: TurnstileVerifier | None = None) -> None:
        self.settings = settings
        self.mailer = mailer
        self.verifier = verifier

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContactHandler":
        return cls(settings, Mailer.from_settings(settings), TurnstileVerifier.from_settings(settings))

    @property
    def cors_headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.settings.allowed_origin,
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "content-type",
        }

    def ok(self) -> Response:
        return Response("OK", media_type="text/plain", headers=self.cors_headers)

    def is_allowed_redirect(self, url: str) -> bool:
        return bool(url) and url.startswith(self.settings.allowed_origin + "/")

    async def handle(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=self.cors_headers)
        if request.method != "POST":
            raise MethodNotAllowedError

        raw = decode_body(await read_body(request))
        data = parse_body(raw, request.headers.get("content-type", ""))

        if is_honeypot_filled(data):
            logger.info("Dropping submission with filled honeypot")
            return self.ok()

        submission = Submission.from_form(data)

        if self.verifier:
            if not submission.turnstile_response:
                raise CaptchaMissingError
            remoteip = client_ip(request.headers.get("x-forwarded-for"))
            if not await self.verifier.verify(submission.turnstile_response, remoteip):
                raise CaptchaFailedError

        if is_spam(submission.message):
            logger.info(f"Dropping spam submission from {submission.email}")
            return self.ok()

        title, body = CONTACT_MESSAGE.render(
            name=submission.name, email=submission.email, message=submission.message
        )
        await self.mailer.send(title, body, reply_to=f"{submission.name} <{submission.email}>")
        logger.info(f"Relayed message from {submission.email}")

        if self.is_allowed_redirect(submission.redirect):
            return Response(status_code=status.HTTP_303_SEE_OTHER, headers={"Location": submission.redirect})
        return self.ok()
