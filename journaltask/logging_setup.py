"""
Logging configuration for JournalTask.

Console output stays readable (our logs only, third-party noise at ERROR+);
the log file under the data directory keeps everything.
"""

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """Let journaltask logs through; only errors from anything else."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "journaltask" or record.name.startswith("journaltask."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    log_dir: str | Path,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """Configure root logging with a filtered console handler and a file handler.

    Call this once, before the first log record is emitted.

    Args:
        log_dir: Directory for journaltask.log (created if missing)
        console_level: Minimum level printed to stderr
        file_level: Minimum level written to the log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Avoid duplicate handlers when called twice (e.g. Streamlit reruns)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_dir / "journaltask.log"), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
