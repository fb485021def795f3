"""Root endpoint."""

from fastapi import APIRouter

from compare_api import __version__

router = APIRouter(tags=["root"])


@router.get("/")
def read_root() -> dict:
    """Service banner."""
    return {"message": "Compare API", "service": "compare-api", "version": __version__}
