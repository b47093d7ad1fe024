import logging
import os
import sys
from pathlib import Path

import structlog

LOG_LINE_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class DaemonLogFileHandler(logging.Handler):
    """
    Append-only log sink.

    The log directory is created on demand. If it cannot be created or the
    file cannot be opened, a message goes to the console and the record is
    dropped; logging never takes the daemon down.
    """

    def __init__(self, log_file: Path) -> None:
        super().__init__()
        self.log_file = Path(log_file)
        self.setFormatter(logging.Formatter(LOG_LINE_FORMAT, datefmt=LOG_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        log_dir = self.log_file.parent
        if not log_dir.exists():
            try:
                log_dir.mkdir(parents=True)
            except OSError:
                print(f"Cannot create log dir: {log_dir}", file=sys.__stdout__)
                return

        try:
            line = self.format(record)
            with open(self.log_file, "a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError:
            print(f"Cannot open log file: {self.log_file}", file=sys.__stdout__)
        except Exception:
            self.handleError(record)


def setup_logging(
        log_file: Path | None = None,
        log_level: str = None,
        console: bool = False,
) -> None:
    # Get log level from parameter or environment variable
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    else:
        log_level = log_level.upper()

    # Convert string to logging level
    numeric_level = getattr(logging, log_level, logging.INFO)

    handlers: list[logging.Handler] = []
    if log_file is not None:
        handlers.append(DaemonLogFileHandler(log_file))
    if console or not handlers:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(LOG_LINE_FORMAT, datefmt=LOG_DATE_FORMAT))
        handlers.append(stream)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=["event", "logger"],
                drop_missing=True,
            ),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str):
    return structlog.get_logger(name)
