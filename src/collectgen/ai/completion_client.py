from __future__ import annotations
"""OpenAI chat completion client.

`OpenAICompletionClient.complete(prompt)` sends one user message (optionally
preceded by a system message) to the Chat Completions endpoint and returns
``choices[0].message.content``.

Failure contract:

* a non-2xx status raises `CompletionError("HTTP error! Status: <code>")`;
* connection and timeout problems raise `CompletionError` chained to the SDK
  exception;
* a reply without a first choice or without text raises `CompletionError`.

Every failure is logged before it propagates. The SDK client is built with
``max_retries=0``: one request per call, no retries.
"""

import logging
from typing import Any, Dict, List, NoReturn, Optional

import openai

from collectgen.ai.message_utils import build_chat_messages
from collectgen.ai.model_registry import context_window_for
from collectgen.ai.token_budget import TokenBudgetEstimator
from collectgen.constants import DEFAULT_OPENAI_MODEL, DEFAULT_TIMEOUT
from collectgen.core.interfaces import CompletionClientProtocol
from collectgen.core.models import CompletionRequest
from collectgen.errors import CompletionError, ConfigError
from collectgen.logging.helpers import get_logger


class OpenAICompletionClient(CompletionClientProtocol):
    """Thin OpenAI SDK adapter with strict response parsing and usage capture."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        temperature: Optional[float] = None,
        system_prompt: str = "",
        estimator: Optional[TokenBudgetEstimator] = None,
        sdk_client: Any = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: OpenAI API key, sent as a Bearer token.
            model: Model name for every request.
            base_url: Optional custom endpoint base URL.
            timeout: Per-request timeout in seconds.
            temperature: Sampling temperature; omitted from the request when None.
            system_prompt: Optional system message placed before the prompt.
            estimator: Token estimator used for the context-window check.
            sdk_client: Pre-built object exposing ``chat.completions.create``;
                when given, `api_key`, `base_url` and `timeout` are unused.
            logger: Optional logger instance.
        """
        self._log = logger or get_logger("ai")
        if sdk_client is None:
            if not api_key:
                raise ConfigError("an OpenAI API key is required")
            sdk_client = openai.OpenAI(
                api_key=api_key,
                base_url=base_url or None,
                timeout=timeout,
                max_retries=0,
            )
        self._client = sdk_client
        self._model = model
        self._temperature = temperature
        self._system_prompt = system_prompt
        self._estimator = estimator or TokenBudgetEstimator(logger=self._log)

        self.last_usage: Optional[Dict[str, int]] = None
        self.last_finish_reason: Optional[str] = None

    @property
    def model(self) -> str:
        return self._model

    def complete(self, prompt: str) -> str:
        messages = build_chat_messages(system_prompt=self._system_prompt, user_prompt=prompt)
        self._check_context_window(messages)
        request = CompletionRequest(model=self._model, messages=messages, temperature=self._temperature)

        self.last_usage = None
        self.last_finish_reason = None

        self._log.info("Sending request to OpenAI API (model=%s)...", self._model)
        try:
            rsp = self._client.chat.completions.create(**request.to_payload())
        except openai.APIStatusError as exc:
            self._fail(f"HTTP error! Status: {exc.status_code}", cause=exc, status_code=exc.status_code)
        except openai.OpenAIError as exc:
            self._fail(str(exc) or exc.__class__.__name__, cause=exc)

        self._record_metrics(rsp)
        text = self._extract_text(rsp)
        if text is None:
            self._fail("malformed completion response")
        self._log.info("Received response from OpenAI API.")
        return text

    def _fail(
        self, message: str, *, cause: Optional[BaseException] = None, status_code: Optional[int] = None
    ) -> NoReturn:
        self._log.error("Error communicating with OpenAI API: %s", message)
        raise CompletionError(message, status_code=status_code) from cause

    def _check_context_window(self, messages: List[Dict[str, str]]) -> None:
        window = context_window_for(self._model)
        est = self._estimator.estimate_messages_tokens(messages, model=self._model, context_window=window)
        self._log.info("Prompt size: ~%d tokens", est.tokens_in)
        if est.exceeds_window:
            self._log.warning(
                "prompt (~%d tokens) exceeds the context window of %s (%d); sending anyway",
                est.tokens_in,
                self._model,
                est.context_window,
            )

    @staticmethod
    def _extract_text(rsp: Any) -> Optional[str]:
        """Return ``choices[0].message.content`` or None when absent/empty."""
        choices = getattr(rsp, "choices", None)
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content:
            return None
        return content

    def _record_metrics(self, rsp: Any) -> None:
        usage = getattr(rsp, "usage", None)
        if usage is not None:
            counts: Dict[str, int] = {}
            for key in ("prompt_tokens", "completion_tokens", "total_tokens"):
                val = getattr(usage, key, None)
                if isinstance(val, int):
                    counts[key] = val
            self.last_usage = counts
        choices = getattr(rsp, "choices", None)
        if choices:
            reason = getattr(choices[0], "finish_reason", None)
            self.last_finish_reason = str(reason) if reason else None
