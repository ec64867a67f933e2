"""Scrape trigger routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catalog_i18n.models.schemas import ApiResponse
from catalog_i18n.api.dependencies import Engine

logger = logging.getLogger(__name__)

router = APIRouter()


class ScrapeRequest(BaseModel):
    """Request to run a scrape. Omit module_name to scrape every module."""
    module_name: Optional[str] = None


@router.post("/scrape")
async def run_scrape(engine: Engine, request: Optional[ScrapeRequest] = None):
    """Scrape one module, or all modules sequentially.

    Returns 200 when everything succeeded, 500 when a single-module scrape
    failed, and 207 when a batch completed with some failed modules.
    """
    module_name = request.module_name if request else None
    logger.info(f"[API] Received scraping request: module_name={module_name}")

    if module_name:
        if not engine.registry.is_valid(module_name):
            raise HTTPException(status_code=400, detail=f"Invalid module name: {module_name}")

        result = await engine.reconcile_module(module_name)
        if result.success:
            return ApiResponse(
                success=True,
                data=result,
                message=f"Module {module_name} scraping completed",
            )
        return JSONResponse(
            status_code=500,
            content=ApiResponse(
                success=False,
                data=result,
                error=result.error or "Scraping failed",
            ).model_dump(mode="json"),
        )

    batch = await engine.reconcile_all()
    if batch.failed_modules == 0:
        return ApiResponse(
            success=True,
            data=batch,
            message=(
                "Scraping completed for all modules, "
                f"processed {batch.total_modules} modules total"
            ),
        )

    # 207 Multi-Status: partial success is an expected outcome
    return JSONResponse(
        status_code=207,
        content=ApiResponse(
            success=False,
            data=batch,
            error=(
                f"Some modules failed to scrape, successful: {batch.successful_modules}, "
                f"failed: {batch.failed_modules}"
            ),
            message="Batch scraping completed with errors",
        ).model_dump(mode="json"),
    )


@router.get("/scrape")
async def get_scrape_status(engine: Engine) -> ApiResponse:
    """Get scraper status information."""
    return ApiResponse(
        success=True,
        data={
            "status": "ready",
            "message": "Scraper service is running normally",
            "modules": engine.registry.names(),
        },
    )
