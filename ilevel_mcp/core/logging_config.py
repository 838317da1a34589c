from pathlib import Path
import logging
import sys
from typing import Optional, TextIO
from datetime import datetime


def setup_logging(
    logs_dir: Optional[str | Path] = None,
    log_file_name: str = "server.log",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure root logging to a stream and a file under `logs_dir`.

    Idempotent: calling multiple times won't add duplicate handlers.
    The stream defaults to stderr, stdout belongs to the MCP stdio transport.
    Returns a module-level logger for callers to use.
    """
    if stream is None:
        stream = sys.stderr

    if logs_dir is None:
        logs_dir = Path(__file__).resolve().parent.parent.parent / "logs"
    else:
        logs_dir = Path(logs_dir)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base = Path(log_file_name).stem
    ext = Path(log_file_name).suffix or ".log"
    log_file = logs_dir / f"{base}_{timestamp}{ext}"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    # One file handler per logs dir, whatever the timestamp of the earlier run
    file_handler_exists = any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve().parent == logs_dir.resolve()
        for h in root_logger.handlers
    )

    if not file_handler_exists:
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(formatter)
            fh.setLevel(logging.INFO)
            root_logger.addHandler(fh)
        except OSError as e:
            # stream-only logging when the directory is not writable
            print(f"Could not create log file {log_file}: {e}", file=stream)

    stream_exists = any(
        type(h) is logging.StreamHandler and getattr(h, "stream", None) is stream
        for h in root_logger.handlers
    )

    if not stream_exists:
        sh = logging.StreamHandler(stream)
        sh.setFormatter(formatter)
        sh.setLevel(logging.INFO)
        root_logger.addHandler(sh)

    # httpx logs every request line at INFO; the client already does that
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger(__name__)


def get_log_file() -> Optional[Path]:
    """Path of the file the root logger writes to, or None when logging is stream-only."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Helper to get a logger by name; falls back to module logger."""
    logger = logging.getLogger(name) if name else logging.getLogger(__name__)
    return logger
