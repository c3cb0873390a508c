from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn, Optional, Sequence

from collectgen.config import resolve_config
from collectgen.core.models import GenerationResult
from collectgen.errors import CollectgenError
from collectgen.logging.factory import DefaultLoggerFactory
from collectgen.logging.helpers import get_logger, reset_base_logger
from collectgen.parsing.parser import _build_parser
from collectgen.pipeline import CollectionGenerator

logger = get_logger('collectgen')


def _configure_logging(ns: argparse.Namespace) -> None:
    """Configure process-wide logging, either JSON or plain text."""
    json_logs = bool(ns.json_logs) or os.getenv('COLLECTGEN_JSON_LOGS') == '1'
    level = logging.INFO
    if ns.quiet:
        level = logging.WARNING
    elif ns.verbose:
        level = logging.DEBUG
    reset_base_logger()
    factory = DefaultLoggerFactory(json_logs=json_logs, level=level)
    global logger
    logger = factory.get_logger('collectgen')


def _summarize(result: GenerationResult) -> None:
    if result.dry_run:
        logger.info('✔ %d files, %d prompt chars (dry run)', result.files_read, result.prompt_chars)
        return
    usage = result.usage
    if usage:
        logger.info(
            '✔ %d files → %s (tokens: prompt=%s completion=%s, finish=%s)',
            result.files_read,
            result.output_path,
            usage.get('prompt_tokens', '?'),
            usage.get('completion_tokens', '?'),
            result.finish_reason or '?',
        )
    else:
        logger.info('✔ %d files → %s', result.files_read, result.output_path)


class CollectGen:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str]) -> Optional[GenerationResult]:
        """Parse *argv*, run one generation and return its result.

        Returns None when only ``--version`` was requested.
        """
        ns = _build_parser().parse_args(list(argv))
        if ns.show_version:
            from collectgen import __version__
            print(f'collectgen {__version__}')
            return None

        _configure_logging(ns)
        cfg = resolve_config(ns)
        result = CollectionGenerator(cfg).run()
        _summarize(result)
        return result


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Entry point for the `collectgen` console script and `python -m collectgen`."""
    try:
        CollectGen.run(sys.argv[1:] if argv is None else argv)
        raise SystemExit(0)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except CollectgenError as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('✘ %s', exc)
        raise SystemExit(1)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
