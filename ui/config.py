"""
Environment-based configuration for the carbon footprint form.

Credentials (the PageSpeed API key) are read from the environment on the
server side and are never rendered into the page.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
DEFAULT_SAVE_ENDPOINT = "http://localhost:5000/api/save"


@dataclass(frozen=True)
class AppConfig:
    pagespeed_api_key: Optional[str]
    pagespeed_endpoint: str
    save_endpoint: str
    # None means no timeout (requests' default behaviour).
    request_timeout_s: Optional[float]
    log_level: str

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Construct configuration from environment variables."""

        timeout_raw = (os.getenv("REQUEST_TIMEOUT_S") or "").strip()
        request_timeout_s: Optional[float] = None
        if timeout_raw:
            try:
                request_timeout_s = float(timeout_raw)
            except ValueError:
                raise ValueError(f"Unsupported REQUEST_TIMEOUT_S value: {timeout_raw!r}") from None
            if request_timeout_s <= 0:
                raise ValueError("REQUEST_TIMEOUT_S must be > 0")

        log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Unsupported LOG_LEVEL value: {log_level!r}")

        return cls(
            pagespeed_api_key=(os.getenv("PAGESPEED_API_KEY") or "").strip() or None,
            pagespeed_endpoint=os.getenv("PAGESPEED_ENDPOINT", DEFAULT_PAGESPEED_ENDPOINT),
            save_endpoint=os.getenv("SAVE_ENDPOINT", DEFAULT_SAVE_ENDPOINT),
            request_timeout_s=request_timeout_s,
            log_level=log_level,
        )
