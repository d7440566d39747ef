"""
Recipe generation clients.

Two ways to get a recipe out of the model:
- DirectGenerationClient holds the Gemini key and talks to the API itself.
- ProxiedGenerationClient only posts the form to ``/api/generate`` so the key
  stays on the server.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod

import httpx
from google.genai.errors import APIError
from pydantic import ValidationError

from kitchen.app.domain.models import FilterInput, Recipe
from kitchen.services.errors import GenerationError, RateLimitedError, RecipeDecodeError
from kitchen.services.extract import extract_json
from kitchen.services.gemini_client import GeminiClient
from kitchen.services.prompt import build_prompt

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7

RECIPE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "recipeName": {"type": "STRING", "description": "اسم الوصفة."},
        "description": {"type": "STRING", "description": "وصف قصير وجذاب للطبق."},
        "servings": {"type": "STRING", "description": "عدد الحصص التي تكفيها الوصفة."},
        "prepTime": {"type": "STRING", "description": "مدة التحضير، مثال: '15 دقيقة'."},
        "cookTime": {"type": "STRING", "description": "مدة الطهي، مثال: '30 دقيقة'."},
        "ingredients": {
            "type": "ARRAY",
            "description": "قائمة بجميع المكونات المطلوبة للوصفة، مع الكميات.",
            "items": {"type": "STRING"},
        },
        "instructions": {
            "type": "ARRAY",
            "description": "تعليمات الطهي خطوة بخطوة.",
            "items": {"type": "STRING"},
        },
    },
    "required": [
        "recipeName",
        "description",
        "ingredients",
        "instructions",
        "servings",
        "prepTime",
        "cookTime",
    ],
}


def _is_rate_limited_error(exc: Exception) -> bool:
    status_code = getattr(exc, "code", None) or getattr(exc, "status_code", None)
    if status_code == 429:
        return True
    return "RESOURCE_EXHAUSTED" in str(exc)


def parse_recipe(raw_text: str) -> Recipe:
    json_text = extract_json(raw_text.strip())
    try:
        payload = json.loads(json_text)
    except json.JSONDecodeError as decode_error:
        logger.error("Generation response is not valid JSON: %r", raw_text)
        raise RecipeDecodeError(raw_text, f"invalid JSON: {decode_error}") from decode_error

    try:
        return Recipe.model_validate(payload)
    except ValidationError as validation_error:
        logger.error("Generation response does not match the recipe schema: %r", raw_text)
        raise RecipeDecodeError(raw_text, f"schema mismatch: {validation_error}") from validation_error


class GenerationClient(ABC):
    @abstractmethod
    def generate(self, form: FilterInput) -> Recipe:
        """Produce one recipe for ``form`` or raise GenerationError."""


class DirectGenerationClient(GenerationClient):
    def __init__(self, gemini: GeminiClient) -> None:
        self._gemini = gemini

    def generate(self, form: FilterInput) -> Recipe:
        prompt = build_prompt(form)
        try:
            raw_text = self._gemini.generate_json(
                prompt,
                response_schema=RECIPE_SCHEMA,
                temperature=TEMPERATURE,
            )
        except APIError as err:
            if _is_rate_limited_error(err):
                raise RateLimitedError(
                    "Gemini rate limit reached. Try again in a moment.",
                    cause=str(err),
                ) from err
            logger.exception("Error calling Gemini API")
            raise GenerationError("Failed to generate recipe from API.", cause=str(err)) from err
        except httpx.HTTPError as err:
            logger.exception("Gemini API is unreachable")
            raise GenerationError("Failed to generate recipe from API.", cause=str(err)) from err
        except Exception as err:
            logger.exception("Unexpected failure calling Gemini")
            raise GenerationError("Failed to generate recipe from API.", cause=str(err) or type(err).__name__) from err

        return parse_recipe(raw_text)


class ProxiedGenerationClient(GenerationClient):
    def __init__(self, endpoint_url: str, http_client: httpx.Client | None = None) -> None:
        self.endpoint_url = endpoint_url
        self._http = http_client or httpx.Client()

    def generate(self, form: FilterInput) -> Recipe:
        try:
            response = self._http.post(self.endpoint_url, json=form.model_dump())
        except httpx.HTTPError as err:
            logger.error("Generation proxy unreachable at %s: %s", self.endpoint_url, err)
            raise GenerationError("Generation service unreachable.", cause=str(err)) from err

        if response.status_code != 200:
            details = _error_details(response)
            logger.error("Generation proxy returned %s: %s", response.status_code, details)
            if response.status_code == 429:
                raise RateLimitedError("Generation service is rate limited.", cause=details)
            raise GenerationError(
                f"Generation service returned HTTP {response.status_code}.",
                cause=details,
            )

        return parse_recipe(response.text)


def _error_details(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("details") or body.get("error") or body.get("message") or body)
    return str(body)
