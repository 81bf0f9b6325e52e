"""HTTP interface for intent detection and catalog management.

A thin FastAPI layer: it validates request shape and length, delegates to the
detector and catalog, and maps catalog errors to HTTP status codes.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from intentbot import __version__
from intentbot.catalog.intent import IntentDefinition
from intentbot.catalog.store import IntentExistsError, IntentNotFoundError
from intentbot.detector import DetectionMethod, IntentDetector

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT_LENGTH = 1000


class DetectIntentRequest(BaseModel):
    """Body of ``POST /api/detect-intent``."""

    text: str
    method: str | None = None


class IntentPayload(BaseModel):
    """Body of ``POST /api/intents``."""

    id: str
    name: str | None = None
    description: str | None = None
    patterns: list[str] = Field(min_length=1)
    parameters: dict[str, dict[str, Any]] = Field(default_factory=dict)
    synonyms: dict[str, list[str]] = Field(default_factory=dict)
    confidence: float | None = None
    priority: int | None = None


def create_app(
    detector: IntentDetector,
    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        detector: Detector wired to the catalog to serve.
        max_text_length: Longest accepted input text.

    Returns:
        FastAPI app with detection and catalog routes.
    """
    app = FastAPI(title="intentbot", version=__version__)
    catalog = detector.catalog

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/detect-intent")
    async def detect_intent(request: DetectIntentRequest) -> dict[str, Any]:
        """Detect the intent of a text and extract its parameters."""
        text = request.text.strip()
        if not text:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="text cannot be empty",
            )
        if len(text) > max_text_length:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"text exceeds {max_text_length} characters",
            )

        method: DetectionMethod | None = None
        if request.method:
            try:
                method = DetectionMethod(request.method)
            except ValueError:
                valid = [m.value for m in DetectionMethod]
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Unknown method {request.method!r}; expected {valid}",
                ) from None

        result = await detector.detect(text, method)
        logger.info(
            f"Detected {result.intent_id or 'none'} "
            f"({result.confidence:.2f}) via {result.method.value}"
        )
        return result.to_dict()

    @app.get("/api/intents")
    async def list_intents() -> dict[str, Any]:
        intents = catalog.export()
        return {"intents": intents, "total": len(intents)}

    @app.get("/api/intents/{intent_id}")
    async def get_intent(intent_id: str) -> dict[str, Any]:
        intent = catalog.get_intent(intent_id)
        if intent is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Intent '{intent_id}' does not exist",
            )
        return intent.to_export_dict()

    @app.post("/api/intents", status_code=status.HTTP_201_CREATED)
    async def add_intent(payload: IntentPayload) -> dict[str, Any]:
        data = payload.model_dump(exclude_none=True)
        try:
            intent = IntentDefinition.from_dict(data.pop("id"), data)
            catalog.add_intent(intent)
        except IntentExistsError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
            )
        return intent.to_export_dict()

    @app.put("/api/intents/{intent_id}")
    async def update_intent(
        intent_id: str,
        changes: dict[str, Any] = Body(...),
    ) -> dict[str, Any]:
        changes.pop("id", None)
        try:
            intent = catalog.update_intent(intent_id, changes)
        except IntentNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
            )
        return intent.to_export_dict()

    @app.delete("/api/intents/{intent_id}")
    async def remove_intent(intent_id: str) -> dict[str, Any]:
        try:
            catalog.remove_intent(intent_id)
        except IntentNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        return {"deleted": intent_id}

    @app.get("/api/methods")
    async def list_methods() -> dict[str, Any]:
        return detector.available_methods()

    @app.get("/api/status")
    async def service_status() -> dict[str, Any]:
        return {
            "version": __version__,
            "default_method": detector.default_method.value,
            "catalog": catalog.stats(),
        }

    return app
