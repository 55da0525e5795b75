"""Health and configuration routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from emoji_rewriter.config.settings import get_settings
from emoji_rewriter.health import collect_health


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health() -> dict[str, object]:
    """Health check including a smoke rewrite."""
    return await collect_health(deep_checks=True)


@router.get("/health/live")
async def health_live() -> dict[str, object]:
    """Liveness probe (shallow checks)."""
    return await collect_health(deep_checks=False)


class AssetConfigResponse(BaseModel):
    """Asset configuration snapshot for debugging."""

    base: str
    size: str
    ext: str
    class_name: str
    fallback_class_name: str
    native_support_mode: str
    http2_enabled: bool


@router.get("/health/config", response_model=AssetConfigResponse)
async def health_config() -> AssetConfigResponse:
    """Return the effective asset configuration."""
    settings = get_settings()
    assets = settings.assets
    return AssetConfigResponse(
        base=assets.effective_base,
        size=assets.size,
        ext=assets.ext,
        class_name=assets.class_name,
        fallback_class_name=assets.fallback_class_name,
        native_support_mode=settings.probe.mode.value,
        http2_enabled=settings.http.http2_enabled,
    )
