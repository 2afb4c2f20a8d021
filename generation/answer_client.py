"""
Shared client for the generative answer service.

Talks to any OpenAI-compatible Chat Completions endpoint through the OpenAI
SDK. Defaults to Gemini's OpenAI-compatible endpoint; point
GENERATION_BASE_URL at another provider (or leave it empty for OpenAI).

Model: gemini-2.0-flash  (override with GENERATION_MODEL env var)
"""

import logging
import os
from typing import Optional

import openai
from openai import AsyncOpenAI

from generation.errors import UpstreamCallFailure

log = logging.getLogger(__name__)

# ── Model config ───────────────────────────────────────────────────────────────
GENERATION_MODEL = os.getenv("GENERATION_MODEL", "gemini-2.0-flash")
GENERATION_BASE_URL = os.getenv(
    "GENERATION_BASE_URL",
    "https://generativelanguage.googleapis.com/v1beta/openai/",
)
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.1"))
GENERATION_TOP_P = float(os.getenv("GENERATION_TOP_P", "0.8"))
GENERATION_MAX_TOKENS = int(os.getenv("GENERATION_MAX_TOKENS", "4096"))
GENERATION_TIMEOUT_SECONDS = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "60"))

SYSTEM_PROMPT = "You are an expert academic problem solver. Output only the JSON object that is asked for."


class AnswerClient:
    """One prompt in, one text response out. No retries."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = GENERATION_MODEL,
        temperature: float = GENERATION_TEMPERATURE,
        top_p: float = GENERATION_TOP_P,
        max_tokens: int = GENERATION_MAX_TOKENS,
    ):
        self._client = client
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens

    async def complete(self, prompt: str) -> str:
        """
        Call Chat Completions and return the assistant message text.

        Raises:
            UpstreamCallFailure: transport, timeout, auth or provider error
        """
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                top_p=self.top_p,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as e:
            log.error(f"Generative service call failed ({type(e).__name__}): {e}")
            raise UpstreamCallFailure("AI service call failed", details=str(e)) from e

        if not response.choices:
            raise UpstreamCallFailure("AI service returned no choices")
        return response.choices[0].message.content or ""


# Lazy singleton
_answer_client: Optional[AnswerClient] = None


def _api_key() -> Optional[str]:
    return (
        os.getenv("GENERATION_API_KEY")
        or os.getenv("GEMINI_API_KEY")
        or os.getenv("OPENAI_API_KEY")
    )


def get_answer_client() -> AnswerClient:
    global _answer_client
    if _answer_client is None:
        api_key = _api_key()
        if not api_key:
            raise RuntimeError(
                "GENERATION_API_KEY is not set. Add it to your .env file."
            )
        _answer_client = AnswerClient(
            AsyncOpenAI(
                api_key=api_key,
                base_url=GENERATION_BASE_URL or None,
                timeout=GENERATION_TIMEOUT_SECONDS,
                max_retries=0,
            )
        )
    return _answer_client
