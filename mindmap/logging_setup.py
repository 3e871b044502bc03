"""Logging setup for the mindmap application."""

import datetime
import logging
import os

LOGS_DIR = "logs"


def _log_filename(logs_dir):
    current_time = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(logs_dir, f"mindmap_session_{current_time}.log")


def _build_handlers(log_filename):
    # File handler for debug+ messages
    file_handler = logging.FileHandler(log_filename)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )

    # Console handler for info+ messages
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    return file_handler, console_handler


def rotate_logs(max_logs=20, logs_dir=LOGS_DIR):
    """Delete the oldest session logs so that at most ``max_logs`` remain.

    Returns:
        List of removed file names
    """
    removed = []
    if not os.path.exists(logs_dir):
        return removed
    log_files = sorted(f for f in os.listdir(logs_dir) if f.endswith('.log'))
    for old_log in log_files[:-max_logs] if len(log_files) > max_logs else []:
        try:
            os.remove(os.path.join(logs_dir, old_log))
            removed.append(old_log)
        except OSError as e:
            logging.getLogger(__name__).warning(f"Error removing log file {old_log}: {str(e)}")
    return removed


def get_logger(name=None, logs_dir=LOGS_DIR):
    """Get a logger instance with proper configuration.

    Args:
        name: Optional name for the logger, defaults to the root logger
        logs_dir: Directory receiving the session log file

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if handlers haven't been set up
    if not logger.handlers:
        os.makedirs(logs_dir, exist_ok=True)
        logger.setLevel(logging.DEBUG)

        log_filename = _log_filename(logs_dir)
        for handler in _build_handlers(log_filename):
            logger.addHandler(handler)

        logger.info(f"Logger initialized. Logging to: {log_filename}")

    return logger


def create_new_log(logs_dir=LOGS_DIR):
    """Create a new log file and reset the root logger.

    Returns:
        str: Path to the new log file
    """
    root_logger = logging.getLogger()

    # Close existing handlers
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    os.makedirs(logs_dir, exist_ok=True)
    log_filename = _log_filename(logs_dir)
    for handler in _build_handlers(log_filename):
        root_logger.addHandler(handler)

    root_logger.info(f"Created new log file: {log_filename}")
    return log_filename
