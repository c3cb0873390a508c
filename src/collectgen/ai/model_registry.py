from __future__ import annotations
"""Model registry for context-window metadata.

Only what the generator needs: the context window of a model family, used to
warn before sending a prompt that will not fit. Resolution is prefix based,
longest prefix first, so ``gpt-4o-mini`` resolves to ``gpt-4o`` rather than
``gpt-4``.

Public API:
    - ModelSpec: Dataclass that describes a model family.
    - register_model(prefix, spec): Register or override a spec at runtime.
    - resolve_model_spec(model): Resolve the closest ModelSpec for a name.
    - context_window_for(model): Convenience to get the context window.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class ModelSpec:
    """Immutable description of a model family."""
    family: str
    context_window: Optional[int]


_GENERIC = ModelSpec(family="generic-chat", context_window=None)

# Lower-cased name prefixes.
_MODEL_SPEC_REGISTRY: Dict[str, ModelSpec] = {
    "gpt-3.5-turbo": ModelSpec(family="gpt-3.5-turbo", context_window=16385),
    "gpt-4": ModelSpec(family="gpt-4", context_window=8192),
    "gpt-4-32k": ModelSpec(family="gpt-4-32k", context_window=32768),
    "gpt-4-turbo": ModelSpec(family="gpt-4-turbo", context_window=128000),
    "gpt-4o": ModelSpec(family="gpt-4o", context_window=128000),
    "gpt-4.1": ModelSpec(family="gpt-4.1", context_window=128000),
}


def register_model(prefix: str, spec: ModelSpec) -> None:
    """Register or override a model spec.

    Raises:
        ValueError: If prefix is empty.
    """
    key = (prefix or "").strip().lower()
    if not key:
        raise ValueError("prefix must be non-empty")
    _MODEL_SPEC_REGISTRY[key] = spec


def resolve_model_spec(model: str) -> ModelSpec:
    m = (model or "").lower().strip()
    for prefix in sorted(_MODEL_SPEC_REGISTRY, key=len, reverse=True):
        if m.startswith(prefix):
            return _MODEL_SPEC_REGISTRY[prefix]
    return _GENERIC


def context_window_for(model: str) -> Optional[int]:
    return resolve_model_spec(model).context_window
