# src/velvet_todo/llm/client.py

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import httpx
import openai
from openai import OpenAI

from ..config import get_settings
from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)


def _is_auth_error(exc: Exception) -> bool:
    return isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError))


def _is_rate_limit_error(exc: Exception) -> bool:
    return isinstance(exc, openai.RateLimitError)


def _is_connection_error(exc: Exception) -> bool:
    # APITimeoutError is a subclass of APIConnectionError.
    return isinstance(exc, (openai.APIConnectionError, httpx.TimeoutException))


def _is_not_found_error(exc: Exception) -> bool:
    return isinstance(exc, openai.NotFoundError)


def _make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(
        connect=connect_s,
        read=read_s,
        write=10.0,
        pool=connect_s,
    )


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "LLM is not configured (missing API key). Set VELVET_OPENROUTER_API_KEY in .env (see .env.example)."
    if "LLM model is not set" in msg:
        return "LLM is not configured (no model). Set VELVET_LLM_MODEL in .env (see .env.example)."
    if "LLM base URL is not set" in msg:
        return "LLM is not configured (missing base URL). Set VELVET_OPENROUTER_BASE_URL in .env (see .env.example)."
    return msg


class OpenRouterLLMClient:
    """
    OpenAI-compatible chat completion client (OpenRouter by default).

    - Validates configuration eagerly (raises RuntimeError if the key is missing),
      so bootstrap can fall back to the offline client.
    - SDK retries are disabled: one call per request, errors surface to the caller.
    """

    def __init__(self, settings: Any = None) -> None:
        if settings is None:
            settings = get_settings()

        api_key = getattr(settings, "openrouter_api_key", None)
        base_url = getattr(settings, "openrouter_base_url", "") or ""
        model = getattr(settings, "llm_model", "") or ""

        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set VELVET_OPENROUTER_API_KEY in your .env.")
        if not base_url.strip():
            raise RuntimeError("LLM base URL is not set. Set VELVET_OPENROUTER_BASE_URL in your .env.")
        if not model.strip():
            raise RuntimeError("LLM model is not set. Set VELVET_LLM_MODEL in your .env.")

        self._model = model.strip()
        self._headers: Dict[str, str] = dict(getattr(settings, "extra_headers", {}) or {})
        self._timeout = _make_timeout(
            connect_s=float(getattr(settings, "llm_connect_timeout", 5.0)),
            read_s=float(getattr(settings, "llm_read_timeout", 60.0)),
        )
        self._client = OpenAI(
            base_url=str(base_url),
            api_key=str(api_key),
            timeout=self._timeout,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    def complete(
        self,
        messages: List[ChatMessage],
        system_prompt: str,
        *,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Run one chat completion and return the message content.

        Errors are re-raised as RuntimeError with a short, user-presentable message;
        the original exception is chained.
        """
        kwargs: Dict[str, Any] = {}
        if response_format is not None:
            kwargs["response_format"] = response_format

        logger.info("LLM: request model=%s messages=%d", self._model, len(messages))
        t0 = time.monotonic()

        try:
            resp = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "system", "content": system_prompt}, *messages],
                extra_headers=self._headers or None,
                timeout=self._timeout,
                **kwargs,
            )
        except Exception as e:
            if _is_auth_error(e):
                raise RuntimeError(
                    "LLM authentication failed. Check your API key (VELVET_OPENROUTER_API_KEY)."
                ) from e
            if _is_not_found_error(e):
                raise RuntimeError(f"LLM model not available: {self._model}") from e
            if _is_rate_limit_error(e):
                raise RuntimeError("LLM is rate-limited. Try again later.") from e
            if _is_connection_error(e):
                raise RuntimeError("LLM network/timeout error. Try again later.") from e
            raise RuntimeError(f"LLM request failed ({e.__class__.__name__}).") from e

        content: str | None = None
        try:
            content = resp.choices[0].message.content
        except (AttributeError, IndexError):
            content = None

        if not content:
            raise RuntimeError(f"Model returned no content: {self._model}")

        logger.info("LLM: response from model=%s (%.2fs, %d chars)", self._model, time.monotonic() - t0, len(content))
        return content
