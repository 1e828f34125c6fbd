from __future__ import annotations

import math
from typing import Any, Dict, Optional

import requests

from estimation.footprint import Strategy
from ui.config import DEFAULT_PAGESPEED_ENDPOINT
from ui.errors import FetchError, MetricMissingError
from ui.logging import get_logger

# PageSpeed Insights v5: https://developers.google.com/speed/docs/insights/v5/get-started

log = get_logger(__name__)

_BYTE_WEIGHT_AUDIT = "total-byte-weight"


def _run_pagespeed(
    url: str,
    strategy: Strategy,
    *,
    api_key: Optional[str],
    endpoint: str,
    timeout_s: Optional[float],
) -> requests.Response:
    params = {"url": url, "strategy": strategy}
    if api_key:
        params["key"] = api_key
    try:
        r = requests.get(endpoint, params=params, timeout=timeout_s)
    except requests.RequestException as e:
        raise FetchError() from e
    if not r.ok:
        log.warning("pagespeed_http_error", status_code=r.status_code)
        raise FetchError()
    return r


def extract_total_byte_weight(payload: Any) -> float:
    """Pull lighthouseResult.audits["total-byte-weight"].numericValue out of a PSI response."""
    try:
        value = payload["lighthouseResult"]["audits"][_BYTE_WEIGHT_AUDIT]["numericValue"]
    except (KeyError, TypeError):
        raise MetricMissingError() from None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MetricMissingError()
    if not math.isfinite(value) or value < 0:
        raise MetricMissingError()
    return float(value)


def fetch_total_byte_weight(
    url: str,
    strategy: Strategy,
    *,
    api_key: Optional[str] = None,
    endpoint: str = DEFAULT_PAGESPEED_ENDPOINT,
    timeout_s: Optional[float] = None,
) -> float:
    """Run a PageSpeed audit for `url` and return the total transferred bytes."""
    r = _run_pagespeed(url, strategy, api_key=api_key, endpoint=endpoint, timeout_s=timeout_s)
    try:
        payload: Dict[str, Any] = r.json()
    except ValueError:
        raise MetricMissingError() from None

    byte_weight = extract_total_byte_weight(payload)
    log.info("pagespeed_fetched", total_byte_weight=byte_weight)
    return byte_weight
