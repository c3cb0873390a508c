# collectgen/parsing/parser.py
from __future__ import annotations

import argparse

from collectgen.constants import (
    DEFAULT_ENTRY_FILE,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_SOURCE_DIR,
)


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.

    Notes:
        - Defaults that can also come from the environment are left as None
          here; `collectgen.config.resolve_config` applies the precedence.
    """
    p = argparse.ArgumentParser(
        prog="collectgen",
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s [OPTIONS] TARGET [TARGET …]",
        description=(
            "collectgen – build a Postman collection from project sources with an LLM\n"
            "Scans <project>/src for the named target directories, concatenates the "
            "selected files into one prompt and saves the model's reply."
        ),
    )

    g_loc = p.add_argument_group("Discovery")
    g_ai = p.add_argument_group("AI integration")
    g_out = p.add_argument_group("Output")
    g_misc = p.add_argument_group("Miscellaneous")

    # -----------------------
    # Discovery
    # -----------------------
    g_loc.add_argument(
        "targets",
        metavar="TARGET",
        nargs="*",
        help=(
            "Directory name to descend into (e.g. 'routes', 'controllers'). Files whose "
            "path below the source root contains a TARGET name are read."
        ),
    )
    g_loc.add_argument(
        "-d",
        "--dir",
        metavar="NAME",
        action="append",
        dest="dirs",
        help="Same as a positional TARGET. Repeatable.",
    )
    g_loc.add_argument(
        "-C",
        "--project-root",
        metavar="DIR",
        dest="project_root",
        help="Project root (default: current directory). Relative output paths resolve here.",
    )
    g_loc.add_argument(
        "--source-dir",
        metavar="NAME",
        dest="source_dir",
        help=f"Source folder under the project root to scan (default: {DEFAULT_SOURCE_DIR}).",
    )
    g_loc.add_argument(
        "--entry-file",
        metavar="NAME",
        dest="entry_file",
        help=f"Main file read from the source root itself (default: {DEFAULT_ENTRY_FILE}).",
    )

    # -----------------------
    # AI integration
    # -----------------------
    g_ai.add_argument(
        "-m",
        "--model",
        metavar="MODEL",
        dest="model",
        help=f"Chat model name (default: $COLLECTGEN_MODEL or {DEFAULT_OPENAI_MODEL}).",
    )
    g_ai.add_argument(
        "--api-key",
        metavar="KEY",
        dest="api_key",
        help="OpenAI API key (default: $OPENAI_API_KEY).",
    )
    g_ai.add_argument(
        "--base-url",
        metavar="URL",
        dest="base_url",
        help="Alternate OpenAI-compatible endpoint (default: $OPENAI_BASE_URL).",
    )
    g_ai.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=float,
        dest="timeout",
        help="Request timeout (default: $COLLECTGEN_TIMEOUT or 600).",
    )
    g_ai.add_argument(
        "--temperature",
        metavar="T",
        type=float,
        dest="temperature",
        help="Sampling temperature; omitted from the request unless given.",
    )
    g_ai.add_argument(
        "--system-prompt",
        metavar="TEXT",
        dest="system_prompt",
        help="Optional system message sent before the prompt.",
    )
    g_ai.add_argument(
        "--instructions",
        metavar="FILE",
        dest="instructions_file",
        help="Replace the built-in Postman instructions with the contents of FILE.",
    )

    # -----------------------
    # Output
    # -----------------------
    g_out.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        dest="output",
        help=f"Where to save the model reply (default: {DEFAULT_OUTPUT_FILE}).",
    )
    g_out.add_argument(
        "--prompt-out",
        metavar="FILE",
        dest="prompt_out",
        help="Also save the assembled prompt to FILE.",
    )
    g_out.add_argument(
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Scan and assemble the prompt only; no API call, no output file.",
    )

    # -----------------------
    # Miscellaneous
    # -----------------------
    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines (also $COLLECTGEN_JSON_LOGS=1).",
    )
    verbosity = g_misc.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", dest="quiet", help="Only warnings and errors.")
    verbosity.add_argument("-v", "--verbose", action="store_true", dest="verbose", help="Debug output.")
    g_misc.add_argument("--version", action="store_true", dest="show_version", help="Print version and exit.")

    return p
