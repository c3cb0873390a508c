from __future__ import annotations
"""
Token budget estimator utilities.

Counts are computed with tiktoken. Loading an encoding may need network access
the first time; when that fails the estimate falls back to ~4 chars per token.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional

import tiktoken

from collectgen.logging.helpers import get_logger


@dataclass(frozen=True)
class TokenEstimation:
    tokens_in: int
    context_window: Optional[int] = None

    @property
    def exceeds_window(self) -> bool:
        return self.context_window is not None and self.tokens_in > self.context_window


class TokenBudgetEstimator:
    def __init__(
        self,
        *,
        counter: Optional[Callable[[str, str], int]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._count = counter or self._tiktoken_len
        self._log = logger or get_logger('ai.tokens')

    @staticmethod
    def _tiktoken_len(text: str, model: str) -> int:
        try:
            enc = tiktoken.encoding_for_model(model)
        except KeyError:
            enc = tiktoken.get_encoding('cl100k_base')
        return len(enc.encode(text, disallowed_special=()))

    def estimate_text_tokens(self, text: str, *, model: str) -> int:
        """Return a conservative estimate for token count of plain text."""
        try:
            return self._count(text, model)
        except Exception as exc:
            self._log.debug('token counting unavailable (%s); using length heuristic', exc)
            return max(1, (len(text) + 3) // 4)

    def estimate_messages_tokens(
        self,
        messages: Iterable[Mapping[str, str]],
        *,
        model: str,
        context_window: Optional[int],
    ) -> TokenEstimation:
        text = '\n'.join(f"{m.get('role', '')}: {m.get('content', '')}" for m in messages)
        used = self.estimate_text_tokens(text, model=model)
        window = context_window if isinstance(context_window, int) and context_window > 0 else None
        return TokenEstimation(tokens_in=used, context_window=window)
