import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

import google.generativeai as genai

from moodscale.config import Settings
from moodscale.errors import ServiceUnavailableError, UpstreamError

logger = logging.getLogger(__name__)

MOOD_LABELS = ["very sad", "sad", "neutral", "happy", "very happy"]

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class ParseOk:
    value: Any


@dataclass(frozen=True)
class ParseFailure:
    raw: str
    reason: str


ParseResult = Union[ParseOk, ParseFailure]


def strip_code_fence(text: str) -> str:
    text = text.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


def parse_json_response(raw: str) -> ParseResult:
    """Parse model output that should be JSON but may be wrapped in Markdown."""
    cleaned = strip_code_fence(raw)
    try:
        return ParseOk(json.loads(cleaned))
    except json.JSONDecodeError as e:
        reason = str(e)

    # Chatty replies: keep the outermost {...} and try once more
    match = _OBJECT_RE.search(cleaned)
    if match:
        try:
            return ParseOk(json.loads(match.group(0)))
        except json.JSONDecodeError as e:
            reason = str(e)

    return ParseFailure(raw=raw, reason=reason)


class AIService:
    """Gateway to the Gemini text generation API."""

    def __init__(self, api_key: Optional[str], model_name: str = "gemini-2.5-flash"):
        self.api_key = api_key
        self.model_name = model_name
        self._model = None
        self._model_json = None
        if api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(model_name)
            self._model_json = genai.GenerativeModel(
                model_name,
                generation_config={"response_mime_type": "application/json"},
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AIService":
        return cls(settings.gemini_api_key, settings.gemini_model)

    @property
    def enabled(self) -> bool:
        return self._model is not None

    async def _generate(self, model, prompt: str) -> str:
        if model is None:
            raise ServiceUnavailableError("AI service not configured")
        try:
            response = await model.generate_content_async(prompt)
            return response.text.strip()
        except Exception as e:
            logger.error("Gemini request failed: %s", e)
            raise UpstreamError(f"AI request failed: {e}") from e

    async def generate_text(self, prompt: str) -> str:
        return await self._generate(self._model, prompt)

    async def generate_json(self, prompt: str) -> ParseResult:
        raw = await self._generate(self._model_json, prompt)
        result = parse_json_response(raw)
        if isinstance(result, ParseFailure):
            logger.warning("AI response is not valid JSON: %s", result.reason)
            logger.debug("Raw AI response: %s", result.raw)
        return result
