from __future__ import annotations

"""
Prompt assembly.

The prompt is the scanned file bodies joined by blank lines, wrapped between a
fixed preamble and a ``PROMPT:`` instruction block. The default instructions
ask for an importable Postman collection; callers may supply their own.
"""

from pathlib import Path
from typing import Iterable, Mapping, Optional

from collectgen.constants import FILE_SEPARATOR

PROMPT_PREAMBLE = 'Here is the combined content of my project files:\n\n'

DEFAULT_INSTRUCTIONS = (
    'Create a JSON file that can be imported as a Postman collection. '
    'Organize the requests into folders and subfolders that reflect the structure of the project, '
    'grouping related endpoints together. '
    'Ensure that for each API endpoint, the generated Postman collection includes:\n'
    '- The correct HTTP method.\n'
    "- The full URL, utilizing the 'base_url' variable (which includes the protocol, e.g., 'https://api.example.com').\n"
    "- Appropriate headers, including 'Content-Type' set to 'application/json' where applicable.\n"
    '- The complete request body for endpoints that require one, based on the provided project files.\n'
    'Only return the JSON required for the Postman collection.\n'
    "- Don't include protocol in the url object.\n"
    "- The admin routes have a different variable named 'admin_key' instead of 'jwt_token'.\n"
    '- Include request bodies for POST, PATCH and PUT requests also.\n'
)


def combine_contents(contents: Iterable[str] | Mapping[str, str]) -> str:
    """Join file bodies in order, separated by one blank line.

    A mapping (as returned by the scanner) contributes its values.
    """
    if isinstance(contents, Mapping):
        contents = contents.values()
    return FILE_SEPARATOR.join(contents)


def build_prompt(combined: str, instructions: Optional[str] = None) -> str:
    body = DEFAULT_INSTRUCTIONS if instructions is None else instructions
    return f'{PROMPT_PREAMBLE}{combined}\n\nPROMPT: {body}'


def load_instructions(path: Path) -> str:
    """Read a custom instruction block, trimming surrounding whitespace."""
    return Path(path).read_text(encoding='utf-8').strip() + '\n'
