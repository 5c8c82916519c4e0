from __future__ import annotations
import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from bqcheck.config.settings import Settings
from bqcheck.models.form import FormInput
from bqcheck.models.result import QualificationResult, classify
from bqcheck.models.types import ErrorKind

RESULT_FIELD = "RESULT_MESSAGE_OUT"

log = logging.getLogger(__name__)

def _headers() -> Dict[str, str]:
    return {"Content-Type": "application/json"}

def _extract_message(resp: requests.Response) -> str:
    try:
        payload: Any = resp.json()
    except ValueError as e:
        raise ValueError(f"malformed JSON: {e}") from e
    if not isinstance(payload, dict) or RESULT_FIELD not in payload:
        raise ValueError(f"response has no {RESULT_FIELD}")
    message = payload[RESULT_FIELD]
    if not isinstance(message, str):
        raise ValueError(f"{RESULT_FIELD} is not a string: {message!r}")
    return message

def submit_for_qualification(
    form: FormInput,
    endpoint_url: str,
    timeout: Optional[float] = None,
    delay_seconds: float = 0.0,
    session: Optional[requests.Session] = None,
) -> QualificationResult:
    """One PUT to the qualification service, classified.

    Transport, HTTP status and parse failures come back as ``Verdict.ERROR``
    results; nothing is raised. ``timeout=None`` leaves the transport default.
    """
    body = form.to_request().to_json()
    if delay_seconds:
        time.sleep(delay_seconds)

    http = session or requests
    log.debug("PUT %s %s", endpoint_url, body)
    try:
        r = http.put(endpoint_url, data=body, headers=_headers(), timeout=timeout)
    except requests.RequestException as e:
        log.warning("qualification request failed: %s", e)
        return QualificationResult.failure(ErrorKind.TRANSPORT, str(e))

    if not 200 <= r.status_code < 300:
        log.warning("qualification service answered %s %s", r.status_code, r.reason)
        return QualificationResult.failure(
            ErrorKind.HTTP_STATUS, r.reason or "", status_code=r.status_code
        )

    try:
        message = _extract_message(r)
    except ValueError as e:
        log.warning("unreadable qualification response: %s", e)
        return QualificationResult.failure(ErrorKind.PARSE, str(e))

    result = classify(message)
    log.info("qualification result: %s", result.verdict.value)
    return result

def make_qualifier(
    settings: Settings,
    session: Optional[requests.Session] = None,
) -> Callable[[FormInput], QualificationResult]:
    def qualify(form: FormInput) -> QualificationResult:
        return submit_for_qualification(
            form,
            settings.endpoint_url,
            timeout=settings.timeout_seconds,
            delay_seconds=settings.submit_delay_seconds,
            session=session,
        )
    return qualify
