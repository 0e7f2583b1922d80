from .logging import JsonFormatter, LoggingOptions, TextFormatter, setup_logging, with_context

__all__ = ["JsonFormatter", "LoggingOptions", "TextFormatter", "setup_logging", "with_context"]
