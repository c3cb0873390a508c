from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence


@dataclass(frozen=True)
class CompletionRequest:
    """Body of a single chat completion call."""
    model: str
    messages: Sequence[Mapping[str, str]]
    temperature: Optional[float] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'model': self.model,
            'messages': [dict(m) for m in self.messages],
        }
        if self.temperature is not None:
            payload['temperature'] = self.temperature
        return payload


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one scan → prompt → completion → write run."""
    files_read: int
    prompt_chars: int
    prompt_tokens: int
    output_path: Optional[Path] = None
    prompt_path: Optional[Path] = None
    usage: Mapping[str, int] = field(default_factory=dict)
    finish_reason: Optional[str] = None

    @property
    def dry_run(self) -> bool:
        return self.output_path is None
