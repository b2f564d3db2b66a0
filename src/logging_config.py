import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

LOG_FILE_NAME = "auction_simulator.log"
DEFAULT_LOG_FILE = Path(__file__).parent.parent / "logs" / LOG_FILE_NAME

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(message)s"


def setup_logging(
    log_level: str = "INFO", log_file: Optional[Union[str, Path]] = None
) -> bool:
    """Configure root logging for auction runs.

    The file handler always records DEBUG so every round and fill decision is
    kept; the console only shows ``log_level`` and above.

    Args:
        log_level: Console level name, e.g. "INFO" or "debug".
        log_file: Where to write the rotating log. Defaults to
            ``logs/auction_simulator.log`` at the repo root.

    Returns:
        True if handlers were installed, False if logging was already set up.

    Raises:
        ValueError: If ``log_level`` is not a logging level name.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return False

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    log_path = Path(log_file) if log_file is not None else DEFAULT_LOG_FILE
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Rotate at 5MB, keep 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info("Logging to %s (console level=%s)", log_path, log_level.upper())
    return True
