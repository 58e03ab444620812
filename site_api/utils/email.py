import re
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any

import aiosmtplib
from jinja2 import Environment, FileSystemLoader

from ..exceptions.contact import MailTransportError
from ..logger import get_logger
from ..settings import Settings


logger = get_logger(__name__)


env = Environment(loader=FileSystemLoader(Path(__file__).parent.parent / "templates"), autoescape=True)

EMAIL_REGEX = re.compile(r"^[^@]+@[^@]+\.[^@]+$")


@dataclass
class Message:
    title: str
    template: str

    def render(self, **kwargs: Any) -> tuple[str, str]:
        return self.title.format(**kwargs), env.get_template(self.template).render(**kwargs)


CONTACT_MESSAGE = Message(title="Website inquiry from {name}", template="contact_message.html")


def check_email_shape(email: str) -> bool:
    return EMAIL_REGEX.fullmatch(email) is not None


def header_value(value: str) -> str:
    return " ".join(value.split())


@dataclass
class Mailer:
    hostname: str
    port: int
    username: str
    password: str
    sender: str
    recipient: str
    use_tls: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer":
        return cls(
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_pass,
            sender=settings.mail_sender,
            recipient=settings.mail_recipient,
            use_tls=settings.smtp_tls,
        )

    def build(self, title: str, body: str, *, reply_to: str | None = None) -> MIMEMultipart:
        message = MIMEMultipart()
        message["From"] = self.sender
        message["To"] = self.recipient
        message["Subject"] = header_value(title)
        if reply_to:
            message["Reply-To"] = header_value(reply_to)
        message.attach(MIMEText(body, "html"))
        return message

    async def send(self, title: str, body: str, *, reply_to: str | None = None) -> None:
        message = self.build(title, body, reply_to=reply_to)

        logger.debug(f"Sending email to {self.recipient} ({message['Subject']})")

        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                use_tls=self.use_tls,
                start_tls=False if self.use_tls else None,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.warning(f"Could not send email via {self.hostname}:{self.port}: {e!r}")
            raise MailTransportError from e
