"""Banner and health routes."""
from fastapi import APIRouter, Request, Response

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml; charset=utf-8"
NO_CACHE = "no-store, no-cache, max-age=0"


@router.get("/stats.svg")
async def stats_svg(request: Request) -> Response:
    """
    The embeddable banner. GitHub's camo proxy caches aggressively, so we
    tell it not to.
    """
    svg = await request.app.state.banner_service.get_banner()
    return Response(
        content=svg,
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": NO_CACHE},
    )


@router.get("/health")
def health():
    return {"status": "ok"}
