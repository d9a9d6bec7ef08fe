"""
Front end endpoint.

Serves files from the static bundle. Unknown paths outside the API prefix get
index.html so the single page app can route them itself.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from lorikeet_dash.config import Settings
from lorikeet_dash.dependencies import get_settings, get_static_bundle
from lorikeet_dash.infrastructure.static import StaticBundle

router = APIRouter(tags=["front"])


@router.get("/{tail:path}", include_in_schema=False)
async def front(
    request: Request,
    bundle: StaticBundle = Depends(get_static_bundle),
    settings: Settings = Depends(get_settings),
):
    path = request.url.path

    asset = bundle.get(path)
    if asset is None and not path.startswith(settings.API_PREFIX):
        asset = bundle.index()

    if asset is None:
        raise HTTPException(status_code=404, detail="Not Found")

    return Response(content=asset.content, media_type=asset.media_type)
