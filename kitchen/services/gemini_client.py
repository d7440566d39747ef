from __future__ import annotations

from typing import Any

from google import genai
from google.genai import types

from kitchen.services.errors import GeminiConfigurationError

DEFAULT_MODEL_NAME = "gemini-2.5-flash"


class GeminiClient:
    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL_NAME) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self._client = self._configure_api()

    def _configure_api(self) -> genai.Client:
        if not self.api_key:
            raise GeminiConfigurationError("Missing Google API key.")
        return genai.Client(api_key=self.api_key)

    def generate_json(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        temperature: float,
    ) -> str:
        response = self._client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=response_schema,
                temperature=temperature,
                candidate_count=1,
            ),
        )
        return response.text or ""
