"""
LLM Gateway — Wraps the Groq client with retry, timeout, and token tracking.

Only constructed when a Groq API key is configured.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any

from groq import Groq

from riskpro.config import settings

logger = logging.getLogger("riskpro.llm")


class LLMGateway:
    """
    Groq LLM client wrapper with:
    - Configurable timeout
    - Retry with exponential backoff
    - Token usage tracking
    """

    def __init__(self, api_key: str | None = None) -> None:
        self.timeout = settings.llm_timeout
        self.client = Groq(api_key=api_key or settings.groq_api_key, timeout=self.timeout)
        self.model = settings.insights_model
        self.max_retries = settings.llm_max_retries
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens
        self.total_tokens_used = 0

    async def complete(self, prompt: str, json_mode: bool = True) -> dict[str, Any]:
        """
        Send a prompt to the LLM and return the parsed JSON response.

        With json_mode=False the model answers in plain text; "parsed" is
        then always None and success only requires non-empty content.

        Runs the synchronous Groq SDK in a thread pool to avoid blocking
        the async event loop.

        Returns:
            dict with 'content' (raw text), 'parsed' (JSON or None),
            'tokens_used' (int), 'success' (bool).
        """
        last_error: Exception | None = None

        for attempt in range(self.max_retries):
            try:
                response = await asyncio.to_thread(self._sync_complete, prompt, json_mode)

                content = response.choices[0].message.content or ""
                tokens = getattr(response.usage, "total_tokens", 0) if response.usage else 0
                self.total_tokens_used += tokens
                logger.debug(f"LLM call used {tokens} tokens ({self.total_tokens_used} total)")

                if not json_mode:
                    return {
                        "content": content,
                        "parsed": None,
                        "tokens_used": tokens,
                        "success": bool(content.strip()),
                    }

                try:
                    parsed = json.loads(content)
                except json.JSONDecodeError:
                    parsed = _extract_json(content)

                return {
                    "content": content,
                    "parsed": parsed,
                    "tokens_used": tokens,
                    "success": parsed is not None,
                }

            except Exception as e:
                last_error = e
                logger.warning(
                    f"LLM attempt {attempt + 1}/{self.max_retries} failed: {e}"
                )
                if attempt < self.max_retries - 1:
                    # Exponential backoff: 1s, 2s, 4s
                    await asyncio.sleep(2**attempt)

        logger.error(f"LLM gateway exhausted retries. Last error: {last_error}")
        return {
            "content": "",
            "parsed": None,
            "tokens_used": 0,
            "success": False,
            "error": str(last_error),
        }

    def _sync_complete(self, prompt: str, json_mode: bool = True):
        """Synchronous Groq completion call."""
        kwargs: dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        return self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            **kwargs,
        )


def _extract_json(text: str) -> dict | None:
    """Try to extract a JSON object from markdown-fenced or chatty text."""
    match = re.search(r"```(?:json)?\s*\n(.*?)\n```", text, re.DOTALL)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            pass

    start = text.find("{")
    if start != -1:
        depth = 0
        for i in range(start, len(text)):
            if text[i] == "{":
                depth += 1
            elif text[i] == "}":
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(text[start : i + 1])
                    except json.JSONDecodeError:
                        break

    return None
