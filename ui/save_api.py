from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from estimation.footprint import AuditResult
from ui.config import DEFAULT_SAVE_ENDPOINT
from ui.errors import SaveError
from ui.logging import get_logger

log = get_logger(__name__)


def build_save_payload(*, name: str, email: str, url: str, result: AuditResult) -> Dict[str, Any]:
    return {
        "name": name,
        "email": email,
        "url": url,
        "results": {"MB": result.MB, "grams": result.grams},
        "deviceName": result.device,
    }


def save_audit(
    *,
    name: str,
    email: str,
    url: str,
    result: AuditResult,
    endpoint: str = DEFAULT_SAVE_ENDPOINT,
    timeout_s: Optional[float] = None,
) -> Any:
    """POST the audit to the backend; returns the decoded response body, if any."""
    payload = build_save_payload(name=name, email=email, url=url, result=result)
    try:
        r = requests.post(endpoint, json=payload, timeout=timeout_s)
    except requests.RequestException as e:
        raise SaveError() from e
    if not r.ok:
        log.warning("save_http_error", status_code=r.status_code)
        raise SaveError()

    try:
        body = r.json()
    except ValueError:
        body = None
    log.info("audit_saved", response=body)
    return body
