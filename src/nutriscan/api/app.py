"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request, status

from nutriscan.api.auth import require_token
from nutriscan.api.history import router as history_router
from nutriscan.api.models import AnalyzeRequest, IntakeRequest
from nutriscan.api.profile import router as profile_router
from nutriscan.app_logging import configure_logging
from nutriscan.containers import AppContainer
from nutriscan.domain.products import ProductRecord, product_to_document
from nutriscan.domain.verdict import AnalysisVerdict


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(profile_router)
    app.include_router(history_router)

    async def lookup_product(
        state_container: AppContainer, barcode: str
    ) -> ProductRecord:
        try:
            product = await state_container.product_service.lookup(barcode)
        except httpx.HTTPError:
            logger.exception("Product lookup failed for barcode=%s", barcode)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Product lookup failed",
            ) from None
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
            )
        return product

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post(
        "/products/{barcode}/analysis", dependencies=[Depends(require_token)]
    )
    async def analyze_product(
        barcode: str, body: AnalyzeRequest, request: Request
    ) -> dict[str, object]:
        """Look up a product, analyze it and record it in the scan history."""
        state_container: AppContainer = request.app.state.container
        product = await lookup_product(state_container, barcode)
        settings = state_container.settings
        serving_size = body.serving_size or settings.default_serving_size
        verdict = state_container.analysis_service.analyze(product, serving_size)
        state_container.history_service.add(product, verdict.health.score)
        return _verdict_payload(verdict)

    @app.post("/intake", dependencies=[Depends(require_token)])
    async def log_intake(body: IntakeRequest, request: Request) -> dict[str, object]:
        """Log one serving of a product against today's intake."""
        state_container: AppContainer = request.app.state.container
        product = await lookup_product(state_container, body.barcode)
        settings = state_container.settings
        serving_size = body.serving_size or settings.default_serving_size
        ledger = state_container.goal_tracker.commit(product, serving_size)
        return asdict(ledger)

    @app.get("/intake/progress", dependencies=[Depends(require_token)])
    async def daily_progress(request: Request) -> dict[str, object]:
        """Return today's progress toward each goal."""
        state_container: AppContainer = request.app.state.container
        progress = state_container.goal_tracker.daily_progress()
        return {nutrient: asdict(item) for nutrient, item in progress.items()}

    @app.get("/intake/weekly", dependencies=[Depends(require_token)])
    async def weekly_stats(request: Request) -> dict[str, object]:
        """Return the last seven days of intake totals."""
        state_container: AppContainer = request.app.state.container
        days = state_container.goal_tracker.weekly_stats()
        return {"days": [asdict(day) for day in days]}

    return app


def _verdict_payload(verdict: AnalysisVerdict) -> dict[str, object]:
    return {
        "product": product_to_document(verdict.product),
        "allergens": asdict(verdict.allergens),
        "dietary": asdict(verdict.dietary),
        "goals": asdict(verdict.goals),
        "health": asdict(verdict.health),
        "avoided_ingredients": list(verdict.avoided_ingredients),
        "analyzed_at": verdict.analyzed_at,
    }
