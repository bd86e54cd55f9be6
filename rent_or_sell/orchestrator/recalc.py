# rent_or_sell/orchestrator/recalc.py
"""
Recalculation pipeline (V1)

Purpose
-------
One entry point from raw form values to everything the rendering layer needs:
  1) Normalize the form (repair, don't reject).
  2) Compute the fixed monthly P&I shown beside the loan inputs.
  3) Project Years 0..N.
  4) Summarize the final year and build the share query.

Keystroke-driven callers go through Recalculator, which coalesces bursts of
submissions with a Debouncer so only the last one in a burst is computed.
The engine itself never debounces.

Public API
----------
recalculate(raw_form, as_of=None) -> RecalcResult
Debouncer(fn, delay=0.1)
Recalculator(on_result, delay=0.1, as_of=None)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any, Generic, TypeVar

from rent_or_sell.core.finance import compute_monthly_payment, project, summarize
from rent_or_sell.core.normalize import normalize_form, repaired_fields, to_form
from rent_or_sell.inputs.url_state import to_query_string
from rent_or_sell.schemas.models import RecalcResult

logger = logging.getLogger(__name__)

DEFAULT_DELAY_S = 0.1

R = TypeVar("R")


def recalculate(raw_form: Mapping[str, Any], *, as_of: date | None = None) -> RecalcResult:
    """
    Run one full recalculation.

    Args:
        raw_form: Form id → raw value.
        as_of: Reference date for validation and elapsed payments (defaults to today).

    Returns:
        RecalcResult with validated inputs, yearly rows, summary, canonical form and share query.
    """
    today = as_of or date.today()
    fi = normalize_form(raw_form, today=today)
    repaired = repaired_fields(raw_form, fi)
    if repaired:
        logger.info("recalc: repaired form fields %s", ", ".join(repaired))

    payment = compute_monthly_payment(fi.original_loan_amount, fi.interest_rate, fi.mortgage_term)
    years = project(fi, as_of=today)
    summary = summarize(years, monthly_payment=payment)
    form = to_form(fi)

    logger.debug(
        "recalc: %d years, hold=%.2f sell=%.2f better=%s",
        summary.final_year,
        summary.hold_net_worth,
        summary.sell_value,
        summary.better_option,
    )
    return RecalcResult(
        inputs=fi,
        years=years,
        summary=summary,
        form=form,
        repaired=repaired,
        share_query=to_query_string(form),
    )


class Debouncer(Generic[R]):
    """
    Trailing-edge debounce: each call cancels the pending one and re-arms a timer.

    Only the last call in a burst runs, `delay` seconds after it was made (on a timer
    thread), or immediately via flush().
    """

    def __init__(self, fn: Callable[..., R], delay: float = DEFAULT_DELAY_S) -> None:
        self.fn = fn
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def _take(self) -> tuple[tuple[Any, ...], dict[str, Any]] | None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            call, self._pending = self._pending, None
            return call

    def _fire(self) -> None:
        call = self._take()
        if call is not None:
            args, kwargs = call
            self.fn(*args, **kwargs)

    def flush(self) -> R | None:
        """Run the pending call now, if any, and return its result."""
        call = self._take()
        if call is None:
            return None
        args, kwargs = call
        return self.fn(*args, **kwargs)

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        self._take()


class Recalculator:
    """
    Debounced recalculation front end for interactive callers.

    submit() is for text edits (debounced); submit_now() is for discrete choices such
    as the primary-residence selector, which recalculate immediately.
    """

    def __init__(
        self,
        on_result: Callable[[RecalcResult], None],
        *,
        delay: float = DEFAULT_DELAY_S,
        as_of: date | None = None,
    ) -> None:
        self.on_result = on_result
        self.as_of = as_of
        self._debouncer: Debouncer[RecalcResult] = Debouncer(self._run, delay)

    def _run(self, raw_form: Mapping[str, Any]) -> RecalcResult:
        result = recalculate(raw_form, as_of=self.as_of)
        self.on_result(result)
        return result

    def submit(self, raw_form: Mapping[str, Any]) -> None:
        self._debouncer(dict(raw_form))

    def submit_now(self, raw_form: Mapping[str, Any]) -> RecalcResult:
        self._debouncer.cancel()
        return self._run(dict(raw_form))

    def flush(self) -> RecalcResult | None:
        return self._debouncer.flush()

    def cancel(self) -> None:
        self._debouncer.cancel()
