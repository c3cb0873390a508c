from __future__ import annotations

from collectgen.constants import DEFAULT_ENTRY_FILE, DEFAULT_OPENAI_MODEL, FILE_SEPARATOR
from collectgen.errors import CollectgenError, CompletionError, ConfigError, ScanError
from collectgen.config import GeneratorConfig, resolve_config
from collectgen.io.scanner import SourceScanner
from collectgen.prompting.builder import DEFAULT_INSTRUCTIONS, build_prompt, combine_contents
from collectgen.ai.completion_client import OpenAICompletionClient
from collectgen.pipeline import CollectionGenerator, generate_postman_collection
from collectgen.cli import CollectGen, main

__version__ = '1.0.0'

__all__ = [
    'CollectGen',
    'CollectionGenerator',
    'CollectgenError',
    'CompletionError',
    'ConfigError',
    'DEFAULT_ENTRY_FILE',
    'DEFAULT_INSTRUCTIONS',
    'DEFAULT_OPENAI_MODEL',
    'FILE_SEPARATOR',
    'GeneratorConfig',
    'OpenAICompletionClient',
    'ScanError',
    'SourceScanner',
    'build_prompt',
    'combine_contents',
    'generate_postman_collection',
    'main',
    'resolve_config',
]
