from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from ..exceptions import AssetNotFoundError, PathTraversalError

router = APIRouter(tags=["Frontend"])


@router.api_route("/{asset_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
async def serve_asset(asset_path: str, request: Request):
    resolver = request.app.state.asset_resolver
    try:
        asset = await resolver.load(asset_path)
    except PathTraversalError:
        return PlainTextResponse("Forbidden", status_code=403)
    except AssetNotFoundError:
        return PlainTextResponse("Not Found", status_code=404)
    return Response(content=asset.content, media_type=asset.content_type)
