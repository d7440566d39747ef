"""
Server-side proxy to Gemini.

The browser only ever posts the form here; the API key stays on the server.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kitchen.app.deps import get_server_generator
from kitchen.app.domain.messages import GENERATION_FAILED_ERROR, UNKNOWN_ERROR_MESSAGE
from kitchen.app.domain.models import FilterInput, Recipe
from kitchen.services.errors import GenerationError
from kitchen.services.generation import GenerationClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])


def _failure(details: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": GENERATION_FAILED_ERROR, "details": details},
    )


@router.post("/generate", response_model=Recipe)
def generate_recipe(
    form: FilterInput,
    generator: GenerationClient = Depends(get_server_generator),
):
    try:
        return generator.generate(form)
    except GenerationError as err:
        logger.error("Error in /api/generate: %s", err)
        return _failure(err.cause)
    except Exception as exc:
        logger.exception("Unexpected error in /api/generate")
        return _failure(str(exc) or UNKNOWN_ERROR_MESSAGE)


@router.api_route(
    "/generate",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def generate_method_not_allowed() -> JSONResponse:
    return JSONResponse(status_code=405, content={"message": "Method Not Allowed"})
