"""Scan history endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from nutriscan.api.auth import require_token

if TYPE_CHECKING:
    from nutriscan.containers import AppContainer

router = APIRouter(
    prefix="/history", tags=["history"], dependencies=[Depends(require_token)]
)


@router.get("")
async def list_history(request: Request, limit: int = 10) -> dict[str, object]:
    """Return the most recent scans."""
    container: AppContainer = request.app.state.container
    return {
        "entries": [asdict(entry) for entry in container.history_service.recent(limit)]
    }


@router.get("/search")
async def search_history(request: Request, q: str) -> dict[str, object]:
    """Search scans by name, brand or barcode."""
    container: AppContainer = request.app.state.container
    return {
        "entries": [asdict(entry) for entry in container.history_service.search(q)]
    }


@router.get("/stats")
async def history_stats(request: Request) -> dict[str, object]:
    """Return history totals and recent activity."""
    container: AppContainer = request.app.state.container
    return asdict(container.history_service.stats())


@router.get("/export")
async def export_history(request: Request) -> list[dict[str, object]]:
    """Return the full history as JSON documents."""
    container: AppContainer = request.app.state.container
    return container.history_service.export()


@router.post("/import")
async def import_history(
    request: Request, documents: list[dict[str, object]] = Body(...)
) -> dict[str, int]:
    """Merge exported documents into the history."""
    container: AppContainer = request.app.state.container
    try:
        return container.history_service.import_entries(documents)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.delete("/{barcode}")
async def remove_from_history(barcode: str, request: Request) -> dict[str, str]:
    """Remove one barcode from the history."""
    container: AppContainer = request.app.state.container
    if not container.history_service.remove(barcode):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"status": "ok"}


@router.delete("")
async def clear_history(request: Request) -> dict[str, str]:
    """Delete the whole history."""
    container: AppContainer = request.app.state.container
    container.history_service.clear()
    return {"status": "ok"}
