from httpx import AsyncClient

from site_api import __version__


async def test__status(client: AsyncClient) -> None:
    response = await client.get("/api/status")

    assert response.status_code == 200
    assert response.json() == {"name": "site-api", "version": __version__}
