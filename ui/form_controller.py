"""Form state, lifecycle transitions and the two-step audit submission.

The form state is an immutable record. Every change goes through `reduce`,
which applies one event to the current state and rejects events that are
not valid in the current lifecycle status:

    idle -> validating -> idle (error)
                       -> fetching -> idle (error)
                                   -> saving -> idle (error, result kept)
                                             -> idle (result)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import partial
from typing import Callable, Dict, Literal, Optional, Tuple, Union

from estimation.footprint import STRATEGIES, AuditResult, Strategy, audit_result_from_bytes
from ui.config import AppConfig
from ui.errors import AuditError, MissingFieldError, SubmissionInProgressError
from ui.logging import bind_submission_context, clear_submission_context, get_logger
from ui.pagespeed import fetch_total_byte_weight
from ui.save_api import save_audit

log = get_logger(__name__)

Status = Literal["idle", "validating", "fetching", "saving"]
Field = Literal["url", "name", "email", "strategy"]

REQUIRED_FIELDS: Tuple[str, ...] = ("url", "name", "email")


@dataclass(frozen=True)
class AuditRequest:
    url: str
    name: str
    email: str
    strategy: Strategy = "desktop"


@dataclass(frozen=True)
class FormState:
    url: str = ""
    name: str = ""
    email: str = ""
    strategy: Strategy = "desktop"
    status: Status = "idle"
    error: Optional[str] = None
    result: Optional[AuditResult] = None

    @property
    def in_flight(self) -> bool:
        return self.status != "idle"


# --------- Events ---------
@dataclass(frozen=True)
class FieldChanged:
    field: Field
    value: str


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class ValidationFailed:
    message: str


@dataclass(frozen=True)
class ValidationPassed:
    pass


@dataclass(frozen=True)
class AuditComputed:
    result: AuditResult


@dataclass(frozen=True)
class SaveSucceeded:
    pass


@dataclass(frozen=True)
class SubmissionFailed:
    message: str


Event = Union[
    FieldChanged,
    SubmitStarted,
    ValidationFailed,
    ValidationPassed,
    AuditComputed,
    SaveSucceeded,
    SubmissionFailed,
]

_ALLOWED_FROM: Dict[type, Tuple[str, ...]] = {
    FieldChanged: ("idle",),
    SubmitStarted: ("idle",),
    ValidationFailed: ("idle", "validating"),
    ValidationPassed: ("idle", "validating"),
    AuditComputed: ("fetching",),
    SaveSucceeded: ("saving",),
    SubmissionFailed: ("fetching", "saving"),
}


def reduce(state: FormState, event: Event) -> FormState:
    """Apply one event to `state` and return the new state."""
    allowed = _ALLOWED_FROM[type(event)]
    if state.status not in allowed:
        raise ValueError(f"{type(event).__name__} is not valid while status is '{state.status}'")

    if isinstance(event, FieldChanged):
        if event.field == "strategy" and event.value not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{event.value}'. Expected one of {STRATEGIES}.")
        return replace(state, **{event.field: event.value})
    if isinstance(event, SubmitStarted):
        return replace(state, status="validating", error=None, result=None)
    if isinstance(event, ValidationFailed):
        return replace(state, status="idle", error=event.message)
    if isinstance(event, ValidationPassed):
        # Outside a submission, validation only clears the error.
        status = "fetching" if state.status == "validating" else state.status
        return replace(state, status=status, error=None)
    if isinstance(event, AuditComputed):
        return replace(state, status="saving", result=event.result)
    if isinstance(event, SaveSucceeded):
        return replace(state, status="idle")
    # SubmissionFailed: a result computed before a save failure stays visible.
    return replace(state, status="idle", error=event.message)


def validate_request(state: FormState) -> AuditRequest:
    """Build the request from form fields, raising MissingFieldError on the first blank one."""
    for field in REQUIRED_FIELDS:
        if not getattr(state, field).strip():
            raise MissingFieldError(field)
    return AuditRequest(url=state.url, name=state.name, email=state.email, strategy=state.strategy)


MeasureFn = Callable[[str, Strategy], float]
SaveFn = Callable[..., object]


class FormController:
    """Owns the form state and runs submissions against PageSpeed and the save endpoint."""

    def __init__(
        self,
        config: AppConfig,
        *,
        measure: Optional[MeasureFn] = None,
        save: Optional[SaveFn] = None,
        on_change: Optional[Callable[[FormState], None]] = None,
    ):
        self._state = FormState()
        self._measure = measure or partial(
            fetch_total_byte_weight,
            api_key=config.pagespeed_api_key,
            endpoint=config.pagespeed_endpoint,
            timeout_s=config.request_timeout_s,
        )
        self._save = save or partial(
            save_audit,
            endpoint=config.save_endpoint,
            timeout_s=config.request_timeout_s,
        )
        self.on_change = on_change

    @property
    def state(self) -> FormState:
        return self._state

    def dispatch(self, event: Event) -> FormState:
        self._state = reduce(self._state, event)
        if self.on_change is not None:
            self.on_change(self._state)
        return self._state

    def update_fields(self, **values: str) -> FormState:
        for field, value in values.items():
            if getattr(self._state, field) != value:
                self.dispatch(FieldChanged(field=field, value=value))  # type: ignore[arg-type]
        return self._state

    def validate(self) -> bool:
        """Check required fields; sets the error message on failure and clears it on success.

        On an idle form the status is left unchanged. During a submission a
        pass moves the form on to fetching.
        """
        try:
            validate_request(self._state)
        except MissingFieldError as e:
            self.dispatch(ValidationFailed(str(e)))
            return False
        self.dispatch(ValidationPassed())
        return True

    def run_audit(self, request: AuditRequest) -> AuditResult:
        """Measure the page, derive the footprint, then save it. Raises AuditError subclasses."""
        byte_weight = self._measure(request.url, request.strategy)
        result = audit_result_from_bytes(byte_weight, request.strategy)
        self.dispatch(AuditComputed(result))

        self._save(name=request.name, email=request.email, url=request.url, result=result)
        self.dispatch(SaveSucceeded())
        return result

    def submit(self) -> FormState:
        """Top-level submission handler: every AuditError ends as the visible error message."""
        if self._state.in_flight:
            raise SubmissionInProgressError()

        try:
            self.dispatch(SubmitStarted())
            if not self.validate():
                log.info("audit_rejected", error=self._state.error)
                return self._state

            request = validate_request(self._state)
            bind_submission_context(url=request.url, strategy=request.strategy)
            log.info("audit_submitted")
            try:
                self.run_audit(request)
            except AuditError as e:
                log.error("audit_failed", error_type=type(e).__name__, error=str(e))
                self.dispatch(SubmissionFailed(str(e)))
            except Exception:
                log.exception("audit_crashed")
                self.dispatch(SubmissionFailed("Unexpected error during analysis."))
                raise
        finally:
            clear_submission_context()
            if self._state.in_flight:
                # Interrupted (e.g. a Streamlit rerun): discard the partial outcome.
                log.warning("audit_interrupted", status=self._state.status)
                self._state = replace(self._state, status="idle", error=None, result=None)
        return self._state
