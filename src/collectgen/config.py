from __future__ import annotations

"""
Resolved generator settings.

Precedence: CLI flags, then environment variables, then defaults.

Environment:
    OPENAI_API_KEY           API key (``--api-key`` wins).
    OPENAI_BASE_URL          Alternate endpoint base URL.
    COLLECTGEN_MODEL         Model name.
    COLLECTGEN_TIMEOUT       Request timeout in seconds.
    COLLECTGEN_TARGET_DIRS   Comma-separated target directory names.
"""

import argparse
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from collectgen.constants import (
    DEFAULT_ENTRY_FILE,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_SOURCE_DIR,
    DEFAULT_TIMEOUT,
)
from collectgen.errors import ConfigError
from collectgen.logging.helpers import get_logger
from collectgen.prompting.builder import load_instructions

logger = get_logger('config')


@dataclass(frozen=True)
class GeneratorConfig:
    project_root: Path
    target_dirs: Tuple[str, ...] = ()
    source_dir: str = DEFAULT_SOURCE_DIR
    entry_file: str = DEFAULT_ENTRY_FILE
    output_file: str = DEFAULT_OUTPUT_FILE
    model: str = DEFAULT_OPENAI_MODEL
    api_key: Optional[str] = field(default=None, repr=False)
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    temperature: Optional[float] = None
    system_prompt: str = ''
    instructions: Optional[str] = None
    dry_run: bool = False
    prompt_out: Optional[str] = None

    @property
    def source_root(self) -> Path:
        return self.project_root / self.source_dir

    def resolve_path(self, path: str | Path) -> Path:
        """Anchor a relative path at the project root; absolute paths pass through."""
        p = Path(path).expanduser()
        return p if p.is_absolute() else self.project_root / p

    @property
    def output_path(self) -> Path:
        return self.resolve_path(self.output_file)

    @property
    def prompt_path(self) -> Optional[Path]:
        return self.resolve_path(self.prompt_out) if self.prompt_out else None

    def validate(self) -> None:
        """Raise `ConfigError` for settings that cannot produce a run."""
        if not self.dry_run and not self.api_key:
            raise ConfigError('missing OpenAI API key (set OPENAI_API_KEY or pass --api-key)')
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError(f'timeout must be a positive number, got {self.timeout}')
        if not self.output_file:
            raise ConfigError('output file path must not be empty')


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value) or value <= 0:
        logger.warning('Invalid %s=%r; using %s.', name, raw, default)
        return default
    return value


def _split_names(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(n.strip() for n in raw.split(',') if n.strip())


def resolve_config(ns: argparse.Namespace, env: Optional[Mapping[str, str]] = None) -> GeneratorConfig:
    """Merge parsed CLI flags with the environment into a validated config."""
    env = os.environ if env is None else env

    targets = tuple(getattr(ns, 'targets', None) or ()) + tuple(getattr(ns, 'dirs', None) or ())
    if not targets:
        targets = _split_names(env.get('COLLECTGEN_TARGET_DIRS'))
    targets = tuple(dict.fromkeys(targets))

    project_root = Path(getattr(ns, 'project_root', None) or Path.cwd()).expanduser().resolve()

    timeout = getattr(ns, 'timeout', None)
    if timeout is None:
        timeout = _env_float(env, 'COLLECTGEN_TIMEOUT', DEFAULT_TIMEOUT)

    instructions: Optional[str] = None
    instructions_file = getattr(ns, 'instructions_file', None)
    if instructions_file:
        try:
            instructions = load_instructions(Path(instructions_file))
        except OSError as exc:
            raise ConfigError(f'could not read instructions file {instructions_file}: {exc}') from exc

    cfg = GeneratorConfig(
        project_root=project_root,
        target_dirs=targets,
        source_dir=getattr(ns, 'source_dir', None) or DEFAULT_SOURCE_DIR,
        entry_file=getattr(ns, 'entry_file', None) or DEFAULT_ENTRY_FILE,
        output_file=getattr(ns, 'output', None) or DEFAULT_OUTPUT_FILE,
        model=getattr(ns, 'model', None) or env.get('COLLECTGEN_MODEL') or DEFAULT_OPENAI_MODEL,
        api_key=getattr(ns, 'api_key', None) or env.get('OPENAI_API_KEY') or None,
        base_url=getattr(ns, 'base_url', None) or env.get('OPENAI_BASE_URL') or None,
        timeout=float(timeout),
        temperature=getattr(ns, 'temperature', None),
        system_prompt=getattr(ns, 'system_prompt', None) or '',
        instructions=instructions,
        dry_run=bool(getattr(ns, 'dry_run', False)),
        prompt_out=getattr(ns, 'prompt_out', None),
    )
    cfg.validate()
    return cfg
