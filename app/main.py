from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import get_app_settings, get_metric_constants


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = get_app_settings().log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()
    settings = get_app_settings()

    application = FastAPI(
        title=settings.title,
        version=settings.version,
    )

    from app.api.errors import register_error_handlers
    from app.api.routers import metrics_router

    register_error_handlers(application)
    application.include_router(metrics_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok", "version": settings.version}

    constants = get_metric_constants()
    logging.getLogger(__name__).info(
        "Metrics engine ready (ltv_cac_target=%s, nrr_target=%s, projection_months=%d)",
        constants.ltv_cac_target,
        constants.nrr_target,
        constants.projection_months,
    )
    return application


app = create_app()
