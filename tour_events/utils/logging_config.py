"""Logging configuration for the application."""

import logging
import sys

def setup_logging(level: int = logging.INFO):
    """Configure logging for the application."""
    # Create a formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Create a console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not any(getattr(h, '_tour_events', False) for h in root_logger.handlers):
        console_handler._tour_events = True
        root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    # Configure specific loggers
    loggers = [
        'tour_events.client.events',
        'tour_events.client.auth',
        'tour_events.forms.controller',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Don't add handler here since it's already handled by root logger
