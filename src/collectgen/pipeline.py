from __future__ import annotations

"""
Generation pipeline: scan → assemble prompt → completion call → write.

`CollectionGenerator` runs the stages for a resolved `GeneratorConfig`;
`generate_postman_collection` is the keyword-style entry point for library use.

If the environment variable COLLECTGEN_AI_META=1 is set, a sidecar JSON with
`usage` and `finish_reason` is written next to the output file.
"""

import json
import logging
import os
import time
from pathlib import Path
from typing import Optional, Sequence

from collectgen.ai.completion_client import OpenAICompletionClient
from collectgen.ai.message_utils import build_chat_messages
from collectgen.ai.token_budget import TokenBudgetEstimator
from collectgen.config import GeneratorConfig
from collectgen.constants import DEFAULT_ENTRY_FILE, DEFAULT_OPENAI_MODEL, DEFAULT_SOURCE_DIR, DEFAULT_TIMEOUT
from collectgen.core.interfaces import CompletionClientProtocol, ScannerProtocol
from collectgen.core.models import GenerationResult
from collectgen.io.scanner import SourceScanner
from collectgen.logging.helpers import get_logger
from collectgen.prompting.builder import build_prompt, combine_contents


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')


class CollectionGenerator:
    """Runs one generation for a given configuration.

    Collaborators are injectable; by default a `SourceScanner` and an
    `OpenAICompletionClient` are built from the config.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        scanner: Optional[ScannerProtocol] = None,
        client: Optional[CompletionClientProtocol] = None,
        estimator: Optional[TokenBudgetEstimator] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._cfg = config
        self._log = logger or get_logger('pipeline')
        self._scanner = scanner or SourceScanner(entry_file=config.entry_file, logger=get_logger('io.scanner'))
        self._client = client
        self._estimator = estimator or TokenBudgetEstimator(logger=self._log)

    def _get_client(self) -> CompletionClientProtocol:
        if self._client is None:
            cfg = self._cfg
            self._client = OpenAICompletionClient(
                api_key=cfg.api_key,
                model=cfg.model,
                base_url=cfg.base_url,
                timeout=cfg.timeout,
                temperature=cfg.temperature,
                system_prompt=cfg.system_prompt,
                estimator=self._estimator,
                logger=get_logger('ai'),
            )
        return self._client

    def assemble_prompt(self) -> tuple[str, int]:
        """Scan the source root and return ``(prompt, files_read)``."""
        cfg = self._cfg
        self._log.info('Source directory set to: %s', cfg.source_root)
        self._log.info('Target directories: %s', ', '.join(cfg.target_dirs) or '(none)')
        contents = self._scanner.scan(cfg.source_root, cfg.target_dirs)
        self._log.info('Total files read: %d', len(contents))
        if not contents:
            self._log.warning('no files matched under %s; the prompt carries instructions only', cfg.source_root)
        prompt = build_prompt(combine_contents(contents), cfg.instructions)
        return prompt, len(contents)

    def run(self) -> GenerationResult:
        cfg = self._cfg
        started = time.perf_counter()
        self._log.info('Starting Postman collection generation...')

        prompt, files_read = self.assemble_prompt()
        prompt_path = cfg.prompt_path
        if prompt_path is not None:
            _write_text(prompt_path, prompt)
            self._log.info('Prompt written to %s', prompt_path)

        if cfg.dry_run:
            messages = build_chat_messages(system_prompt=cfg.system_prompt, user_prompt=prompt)
            tokens = self._estimator.estimate_messages_tokens(messages, model=cfg.model, context_window=None).tokens_in
            self._log.info('Dry run: prompt has %d chars (~%d tokens); nothing sent.', len(prompt), tokens)
            return GenerationResult(
                files_read=files_read,
                prompt_chars=len(prompt),
                prompt_tokens=tokens,
                prompt_path=prompt_path,
            )

        client = self._get_client()
        self._log.info('Sending prompt to OpenAI to generate Postman collection...')
        reply = client.complete(prompt)

        out_path = cfg.output_path
        self._log.info('Writing generated Postman collection to file: %s', out_path)
        _write_text(out_path, reply)

        usage = dict(getattr(client, 'last_usage', None) or {})
        finish_reason = getattr(client, 'last_finish_reason', None)
        if os.getenv('COLLECTGEN_AI_META') == '1':
            self._write_meta(out_path, usage, finish_reason)

        self._log.info(
            'Postman collection JSON has been saved successfully to %s (%.2fs)',
            out_path,
            time.perf_counter() - started,
        )
        return GenerationResult(
            files_read=files_read,
            prompt_chars=len(prompt),
            prompt_tokens=usage.get('prompt_tokens', 0),
            output_path=out_path,
            prompt_path=prompt_path,
            usage=usage,
            finish_reason=finish_reason,
        )

    def _write_meta(self, out_path: Path, usage: dict, finish_reason: Optional[str]) -> None:
        sidecar = out_path.with_suffix(out_path.suffix + '.meta.json')
        meta = {'model': self._cfg.model, 'usage': usage, 'finish_reason': finish_reason}
        try:
            sidecar.write_text(json.dumps(meta, ensure_ascii=False), encoding='utf-8')
        except OSError as exc:
            # Non-fatal; the collection itself is already on disk.
            self._log.warning('could not write %s: %s', sidecar, exc)


def generate_postman_collection(
    *,
    source_directories: Sequence[str],
    openai_api_key: str,
    output_file_path: str | Path,
    project_root: str | Path | None = None,
    source_dir: str = DEFAULT_SOURCE_DIR,
    model: str = DEFAULT_OPENAI_MODEL,
    entry_file: str = DEFAULT_ENTRY_FILE,
    instructions: Optional[str] = None,
    system_prompt: str = '',
    temperature: Optional[float] = None,
    base_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    prompt_out: str | Path | None = None,
    dry_run: bool = False,
    client: Optional[CompletionClientProtocol] = None,
    scanner: Optional[ScannerProtocol] = None,
    estimator: Optional[TokenBudgetEstimator] = None,
) -> Optional[Path]:
    """Generate a Postman collection and return the path it was written to.

    A dry run stops after the prompt is assembled (and saved to `prompt_out`,
    if given) and returns None; the service is not called and no collection
    is written.

    1. Read the relevant files under ``<project_root>/<source_dir>``.
    2. Combine them into a single prompt.
    3. Send the prompt to the completion service.
    4. Save the reply to `output_file_path` (relative paths resolve against
       `project_root`, which defaults to the current directory).

    Args:
        source_directories: Directory names to descend into.
        openai_api_key: API key used to authenticate the request.
        output_file_path: Destination of the generated collection.
        project_root: Project root; defaults to the current directory.
        source_dir: Folder under the project root that is scanned.
        model: Chat model name.
        entry_file: Main file read from the source root itself.
        instructions: Replacement for the built-in Postman instructions.
        system_prompt: Optional system message sent before the prompt.
        temperature: Sampling temperature; omitted from the request when None.
        base_url: Alternate API endpoint.
        timeout: Request timeout in seconds.
        prompt_out: Where to also save the assembled prompt.
        dry_run: Assemble the prompt only.
        client: Optional pre-built completion client.
        scanner: Optional pre-built scanner.
        estimator: Optional token estimator (dry-run size report).

    Raises:
        ScanError: The source tree could not be read.
        CompletionError: The completion call failed; nothing is written.
        ConfigError: No API key and no client were given outside a dry run,
            or the timeout is not a positive number.
    """
    cfg = GeneratorConfig(
        project_root=Path(project_root or Path.cwd()).resolve(),
        target_dirs=tuple(source_directories),
        source_dir=source_dir,
        output_file=str(output_file_path),
        model=model,
        api_key=openai_api_key or None,
        entry_file=entry_file,
        instructions=instructions,
        system_prompt=system_prompt,
        temperature=temperature,
        base_url=base_url or None,
        timeout=float(timeout),
        prompt_out=str(prompt_out) if prompt_out else None,
        dry_run=dry_run,
    )
    if client is None:
        cfg.validate()
    result = CollectionGenerator(cfg, scanner=scanner, client=client, estimator=estimator).run()
    return result.output_path
