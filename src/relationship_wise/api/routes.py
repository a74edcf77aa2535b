"""REST API router: mounts every resource router under /api."""

from fastapi import APIRouter

from relationship_wise.api import assessments, auth, catalog, chats, progress

router = APIRouter(prefix="/api")
router.include_router(auth.router)
router.include_router(catalog.router)
router.include_router(chats.router)
router.include_router(progress.router)
router.include_router(assessments.router)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
