"""Service status"""

from typing import Any

from fastapi import APIRouter

from .. import __version__


router = APIRouter(tags=["status"])


@router.get("/status")
async def get_status() -> Any:
    """Return the name and version of this service."""

    return {"name": "site-api", "version": __version__}
