from fastapi import APIRouter, Depends

from adaptive_scraper import __version__
from adaptive_scraper.core.build_info import SERVICE_NAME, get_git_sha
from adaptive_scraper.core.container import ServiceContainer, get_container

router = APIRouter()


@router.get("/health")
async def health_check(container: ServiceContainer = Depends(get_container)):
    """Liveness plus the size of the in-memory registries."""
    return {
        "status": "ok",
        "name": SERVICE_NAME,
        "version": __version__,
        "git_sha": get_git_sha(),
        "rule_sets": len(container.rule_engine.list_names()),
        "header_domains": len(container.header_store.list_domains()),
    }
