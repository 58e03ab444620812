import asyncio
from dataclasses import dataclass

import aiohttp

from ..logger import get_logger
from ..settings import Settings


logger = get_logger(__name__)


def client_ip(forwarded_for: str | None) -> str:
    return (forwarded_for or "").split(",")[0].strip()


@dataclass
class TurnstileVerifier:
    secret: str
    verify_url: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "TurnstileVerifier | None":
        if not settings.turnstile_enabled or settings.turnstile_secret is None:
            return None
        return cls(secret=settings.turnstile_secret, verify_url=settings.turnstile_verify_url)

    async def verify(self, response: str, remoteip: str = "") -> bool:
        """Return True only if the verification service confirms the token. Any failure counts as rejection."""

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.verify_url,
                    data={"secret": self.secret, "response": response, "remoteip": remoteip},
                ) as resp:
                    data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Turnstile verification failed: {e!r}")
            return False

        logger.debug(f"Turnstile response: {data}")
        return isinstance(data, dict) and data.get("success") is True
