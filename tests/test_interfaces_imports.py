def test_can_import_all_protocols():
    # Import must succeed and expose the expected names
    import collectgen.core.interfaces as I

    assert hasattr(I, "CompletionClientProtocol")
    assert hasattr(I, "ScannerProtocol")
    assert hasattr(I, "LoggerFactoryProtocol")
    assert hasattr(I, "LoggerLikeProtocol")


def test_default_implementations_satisfy_protocols():
    from collectgen.core.interfaces import CompletionClientProtocol, LoggerFactoryProtocol, ScannerProtocol
    from collectgen.io.scanner import SourceScanner
    from collectgen.logging.factory import DefaultLoggerFactory
    from collectgen.ai.completion_client import OpenAICompletionClient

    assert isinstance(SourceScanner(), ScannerProtocol)
    assert isinstance(DefaultLoggerFactory(), LoggerFactoryProtocol)
    assert isinstance(OpenAICompletionClient(sdk_client=object()), CompletionClientProtocol)


def test_factory_loggers_satisfy_logger_protocol():
    import logging

    from collectgen.core.interfaces import LoggerLikeProtocol
    from collectgen.logging.factory import DefaultLoggerFactory
    from collectgen.logging.helpers import reset_base_logger

    try:
        log = DefaultLoggerFactory(level=logging.WARNING).get_logger("io.scanner")
        assert isinstance(log, LoggerLikeProtocol)
        assert log.name == "collectgen.io.scanner"
    finally:
        reset_base_logger()
