"""
Completion client for the Gemini API.
Sends the system and user prompts once per request; no retries.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 2000


class UpstreamError(Exception):
    """The completion service call failed"""


@dataclass(frozen=True)
class Completion:
    """Free-text model output plus usage metadata"""

    content: str
    model: str
    total_tokens: int = 0


def extract_response_text(response: Any) -> str:
    """
    Extract text content from a Gemini API response.

    Joins the text parts of the first candidate that has any. Falls back to
    response.text, which raises on blocked responses, so errors there are
    treated as empty content.

    Args:
        response: Gemini API response object

    Returns:
        Extracted text content, or an empty string
    """
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or []
        text = "".join(getattr(part, "text", "") or "" for part in parts)
        if text:
            return text

    try:
        return getattr(response, "text", "") or ""
    except ValueError:
        return ""


def extract_total_tokens(response: Any) -> int:
    usage = getattr(response, "usage_metadata", None)
    return getattr(usage, "total_token_count", 0) or 0


class GeminiCompletionClient:
    """Async wrapper around the blocking Gemini SDK call"""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str,
        max_output_tokens: int = MAX_OUTPUT_TOKENS,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.max_output_tokens = max_output_tokens

    def _generate(self, system_prompt: str, user_prompt: str) -> Any:
        # Blocking I/O, run in an executor
        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(
            self.model_name,
            system_instruction=system_prompt,
        )
        generation_config = GenerationConfig(max_output_tokens=self.max_output_tokens)
        return model.generate_content(
            user_prompt,
            generation_config=generation_config,
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> Completion:
        """
        Call Gemini once with the given prompts.

        Args:
            system_prompt: System instruction prompt
            user_prompt: User prompt

        Returns:
            Completion with the response text and token usage

        Raises:
            UpstreamError: If the key is missing or the API call fails
        """
        if not self.api_key:
            raise UpstreamError("GEMINI_API_KEY environment variable is not set")

        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(None, self._generate, system_prompt, user_prompt)
        except Exception as e:
            raise UpstreamError(f"Gemini API error: {e}") from e

        completion = Completion(
            content=extract_response_text(response),
            model=self.model_name,
            total_tokens=extract_total_tokens(response),
        )
        logger.debug(
            '{"event": "gemini_completion_received", "content_length": %d, "tokens": %d}',
            len(completion.content),
            completion.total_tokens,
        )
        return completion
