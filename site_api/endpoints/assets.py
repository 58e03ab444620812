"""Cache-first site assets"""

from fastapi import APIRouter, Depends, Request, Response

from ..services.asset_cache import AssetCacheWorker


router = APIRouter(tags=["assets"])

# httpx has already decoded and measured the body
DROPPED_HEADERS = {"content-encoding", "content-length", "transfer-encoding", "connection"}


def get_asset_worker(request: Request) -> AssetCacheWorker:
    worker = getattr(request.app.state, "asset_worker", None)
    if worker is None:
        raise RuntimeError("AssetCacheWorker not initialized. Check create_app.")
    return worker


@router.get("/{path:path}", include_in_schema=False)
async def get_asset(request: Request, path: str, worker: AssetCacheWorker = Depends(get_asset_worker)) -> Response:
    url = "/" + path
    if request.url.query:
        url += "?" + request.url.query

    response = await worker.fetch(url)
    headers = {key: value for key, value in response.headers.items() if key.lower() not in DROPPED_HEADERS}
    return Response(response.content, response.status_code, headers=headers)
