from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"{name} must be one of {_TRUE + _FALSE}, got {raw!r}")


@dataclass(frozen=True)
class ParserPolicy:
    """Controls the disambiguation retries around format inference.

    - prefer_month_first decides "03/04/2014" when nothing else does.
    - swap_on_mismatch re-runs inference with the flag flipped once when the
      inferred pattern does not construct a valid date.
    - max_restarts caps scan restarts; None means the length of the input.
    """

    prefer_month_first: bool = True
    swap_on_mismatch: bool = True
    max_restarts: int | None = None

    @classmethod
    def from_env(cls) -> "ParserPolicy":
        load_dotenv()
        raw_restarts = os.environ.get("ANYDATE_MAX_RESTARTS", "").strip()
        max_restarts: int | None = None
        if raw_restarts:
            try:
                max_restarts = int(raw_restarts)
            except ValueError:
                raise ValueError(f"ANYDATE_MAX_RESTARTS must be an integer, got {raw_restarts!r}") from None
            if max_restarts < 0:
                raise ValueError(f"ANYDATE_MAX_RESTARTS must be >= 0, got {max_restarts}")
        return cls(
            prefer_month_first=_env_bool("ANYDATE_PREFER_MONTH_FIRST", True),
            swap_on_mismatch=_env_bool("ANYDATE_SWAP_ON_MISMATCH", True),
            max_restarts=max_restarts,
        )


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for scripts. The library itself never does this."""
    load_dotenv()
    name = (level or os.environ.get("LOG_LEVEL", "INFO")).strip().upper()
    if name not in VALID_LOG_LEVELS:
        name = "INFO"
    logging.basicConfig(
        level=getattr(logging, name),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
