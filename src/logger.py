"""
Centralized logging configuration for the Miden Ecosystem directory
"""

import logging
import sys
import os


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        # Color a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname:8}{self.COLORS['RESET']}"
        return super().format(record)


def setup_logging():
    """Configure logging for the application"""

    # Get log level from environment (default to INFO)
    log_level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    logger = logging.getLogger('miden_directory')
    logger.setLevel(log_level)
    logger.handlers = []  # Clear any existing handlers

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    # Format: [TIMESTAMP] [LEVEL] [MODULE] Message
    console_format = ColoredFormatter(
        fmt='[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # Werkzeug logs every request at INFO
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    return logger


def get_logger(name: str = 'miden_directory'):
    """Get a logger instance under the application namespace"""
    if name != 'miden_directory' and not name.startswith('miden_directory.'):
        name = f'miden_directory.{name}'
    return logging.getLogger(name)

