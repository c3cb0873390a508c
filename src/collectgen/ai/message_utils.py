from __future__ import annotations

"""
Utilities to build OpenAI-style chat messages.

Shared by the completion client (actual API calls) and the token estimator so
both see exactly the same conversation:

- Optional system message first (if provided).
- The user message (the assembled prompt) last.
"""

from typing import Dict, List


def build_chat_messages(*, system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
    messages: List[Dict[str, str]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_prompt})
    return messages
