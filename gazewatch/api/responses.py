"""REST endpoints for the classification response log.

Paths:
    POST   /api/save-response   store one response, push it to dashboards
    GET    /api/responses       newest-first page of stored responses
    DELETE /api/responses       wipe the log, tell dashboards to clear
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from gazewatch.foundation.timestamps import InvalidTimestampError
from gazewatch.services.connection_manager import ConnectionManager
from gazewatch.store.observation_store import ObservationStore

logger = logging.getLogger(__name__)


class SaveResponseRequest(BaseModel):
    """Body posted by the capture client after each classification call."""

    question: str = ""
    response: str = Field(..., description="Raw classifier answer; only 'yes' means looking")
    image_size: Optional[int] = Field(None, alias="imageSize")
    processing_time: Optional[int] = Field(None, alias="processingTime")


def create_responses_router(
    store: ObservationStore,
    manager: ConnectionManager,
    default_limit: int = 50,
) -> APIRouter:
    """Factory that wires the response-log endpoints to store + dashboard manager."""

    router = APIRouter(prefix="/api", tags=["responses"])

    @router.post("/save-response")
    async def save_response(body: SaveResponseRequest) -> dict[str, Any]:
        record = await store.save(
            response=body.response,
            question=body.question,
            image_size=body.image_size,
            processing_time=body.processing_time,
        )
        logger.info("Saved response %d: %r", record.id, record.response)

        await manager.broadcast_json({
            "type": "new_response",
            "data": record.model_dump(by_alias=True),
        })
        return {"success": True, "id": record.id}

    @router.get("/responses")
    async def list_responses(
        limit: int = Query(default_limit, ge=1),
        offset: int = Query(0, ge=0),
    ) -> list[dict[str, Any]]:
        try:
            records = await store.page(limit=limit, offset=offset)
        except InvalidTimestampError as exc:
            logger.error("Response listing aborted: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return [r.model_dump(by_alias=True) for r in records]

    @router.delete("/responses")
    async def clear_responses() -> dict[str, Any]:
        deleted = await store.clear()
        await manager.broadcast_json({"type": "clear_responses"})
        return {"success": True, "deletedRows": deleted}

    return router
