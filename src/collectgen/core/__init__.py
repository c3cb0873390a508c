"""Public surface for collectgen.core: protocol types and plain data models.

    from collectgen.core import ScannerProtocol, CompletionRequest, ...
"""

from collectgen.core.interfaces import (
    CompletionClientProtocol,
    LoggerFactoryProtocol,
    LoggerLikeProtocol,
    ScannerProtocol,
)
from collectgen.core.models import CompletionRequest, GenerationResult

__all__ = [
    'CompletionClientProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'ScannerProtocol',
    'CompletionRequest',
    'GenerationResult',
]
