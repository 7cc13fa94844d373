from fastapi import APIRouter

from adaptive_scraper import __version__
from adaptive_scraper.core.build_info import SERVICE_NAME, get_git_sha
from adaptive_scraper.services.export import SUPPORTED_FORMATS

router = APIRouter()


@router.get("/version")
async def get_version():
    """Return API version, git sha and the output formats this build supports."""
    return {
        "name": SERVICE_NAME,
        "version": __version__,
        "git_sha": get_git_sha(),
        "formats": list(SUPPORTED_FORMATS),
    }
