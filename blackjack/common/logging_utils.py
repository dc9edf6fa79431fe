# blackjack/common/logging_utils.py

import logging
import os
from typing import Optional, Tuple

# LOG_LEVEL picks the root level, LOG_RAW=1 appends the frame text to message logs
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_RAW = os.getenv("LOG_RAW", "0") == "1"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Call once from the server and client entry points."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def preview(raw: str, max_len: int = 160) -> str:
    if len(raw) <= max_len:
        return raw
    return raw[:max_len] + f" ... (+{len(raw) - max_len} chars)"


def log_message(
    logger: logging.Logger,
    direction: str,
    peer: Optional[Tuple[str, int]],
    raw: str,
    parsed: Optional[object] = None,
    note: str = "",
    level: int = logging.DEBUG,
) -> None:
    """One log line per frame sent or received on a MessageChannel."""
    parts = [f"[{direction}] {peer[0]}:{peer[1]}" if peer else f"[{direction}] -", f"{len(raw)} chars"]
    if note:
        parts.append(note)
    if parsed is not None:
        parts.append(f"message={parsed}")
    if LOG_RAW:
        parts.append(f"raw={preview(raw)}")
    logger.log(level, " | ".join(parts))
