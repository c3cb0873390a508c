from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public defaults to reduce cross-module coupling.
"""

# Folder under the project root that holds the sources to scan.
DEFAULT_SOURCE_DIR: str = 'src'

# Main application file, read only when it sits directly in the source root.
DEFAULT_ENTRY_FILE: str = 'app.ts'

DEFAULT_OUTPUT_FILE: str = 'postman_collection.json'

DEFAULT_OPENAI_MODEL: str = 'gpt-3.5-turbo'

# Seconds; the SDK default for a single request.
DEFAULT_TIMEOUT: float = 600.0

# Separator placed between two file bodies in the combined prompt.
FILE_SEPARATOR: str = '\n\n'
