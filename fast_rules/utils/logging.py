import logging
import os
import sys
from pathlib import Path

_logging_configured = False
_log_file_path: Path | None = None


def setup_logging(log_file_name: str | None = None):
    """
    Setup logging for the `fast-rules` command line.

    The library itself never calls this; applications embedding the validator
    keep their own logging configuration.

    Environment:
    - LOG_LEVEL: CRITICAL, ERROR, WARNING (default), INFO, DEBUG, NOTSET
    - LOG_DIR: directory for the log file (default: ./log)
    - LOG_FILE_NAME: file name used when `log_file_name` is not given
    - ENV=debug: also log to the console
    """
    global _logging_configured, _log_file_path

    file_name = log_file_name if log_file_name else os.getenv('LOG_FILE_NAME')
    log_file = Path(os.getenv('LOG_DIR', 'log')) / file_name if file_name else None

    # If already configured and path matches, skip reconfiguration
    if _logging_configured and _log_file_path == log_file:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(os.getenv('LOG_LEVEL', 'WARNING').upper())

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), mode='a')
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(file_handler)

    if os.getenv('ENV') == 'debug' or log_file is None:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
        root_logger.addHandler(console_handler)

    _log_file_path = log_file
    _logging_configured = True
    logging.debug("Logging configured successfully")


def get_log_file_path() -> Path | None:
    return _log_file_path
