from .ai import CompletionClientProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .scanner import ScannerProtocol

__all__ = [
    'CompletionClientProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'ScannerProtocol',
]
