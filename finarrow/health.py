"""Health check endpoints with configuration checking.

Reports:
- Application status
- Claude API configuration (no request is made, to avoid cost)
- PDF renderer availability
"""

import importlib.util
from typing import Any, Dict

from fastapi import APIRouter, Depends

from finarrow import __version__
from finarrow.config import Settings
from finarrow.dependencies import get_session_registry, get_settings
from finarrow.logging_config import get_logger
from finarrow.schemas.api import HealthResponse
from finarrow.services.session_store import SessionRegistry

router = APIRouter()
logger = get_logger(__name__)


def check_llm_api(settings: Settings) -> Dict[str, Any]:
    """Check that an Anthropic API key is configured.

    Args:
        settings: Application settings with the Claude API key.

    Returns:
        Dict with status and message.
    """
    if not settings.anthropic_api_key:
        return {"healthy": False, "message": "Anthropic API key not configured"}
    return {"healthy": True, "message": "Claude API key configured", "model": settings.claude_model}


def check_pdf_renderer() -> Dict[str, Any]:
    if importlib.util.find_spec("weasyprint") is None:
        return {"healthy": False, "message": "WeasyPrint not installed"}
    return {"healthy": True, "message": "WeasyPrint available"}


@router.get("/health", response_model=HealthResponse)
def health_check(
    settings: Settings = Depends(get_settings),
    registry: SessionRegistry = Depends(get_session_registry),
) -> HealthResponse:
    """Liveness plus configuration status.

    The service is ``healthy`` when every optional dependency is usable and
    ``degraded`` otherwise; uploads and KPIs work in both states.
    """
    checks = {
        "claude_api": check_llm_api(settings),
        "pdf_renderer": check_pdf_renderer(),
        "sessions": {"healthy": True, "active": len(registry)},
    }
    all_healthy = all(check["healthy"] for check in checks.values())
    status = "healthy" if all_healthy else "degraded"

    logger.info(
        "health_check_performed",
        status=status,
        claude_api=checks["claude_api"]["healthy"],
        pdf_renderer=checks["pdf_renderer"]["healthy"],
    )
    return HealthResponse(status=status, version=__version__, checks=checks)


@router.get("/health/live")
def liveness_check() -> Dict[str, Any]:
    """Kubernetes-style liveness probe."""
    return {"alive": True}
