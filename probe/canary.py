# ============================================================================
# CANARY EXECUTION
# ============================================================================
# EPOCH: 1 - SELF-TUNING PROBES
# STATUS: Probe - Canary transform and output validation
# PURPOSE: Run one timed test transform and judge the result
# CREATED: 19 OCT 2026
# ============================================================================
"""
Canary Execution

Runs one canary:

1. Lifecycle pre-check (latch, transform count)
2. Copy the bundled fixture to a fresh source file, reserve a target file
3. Call the transform, timing only that call
4. Validate the target (exists, size within the expected range)
5. Mark the controller initialized, feed the timing model
6. Lifecycle post-check (duration ceiling, latch, transform count)
7. Compare against the learned threshold

A transform that raises or leaves invalid output still gets the post-check,
so a ceiling it trips decides the status. The transform call is the only
slow step and runs without holding ProbeState.lock. Scratch files are
removed afterwards.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

from core.contracts import ErrorKind
from infrastructure.storage import StorageError, TempFileProvider
from probe.config import ProbeConfig
from probe.core import CanaryResult, ProbeOutcome, ProbeTicket
from probe.guard import LifecycleGuard
from probe.state import ProbeState
from probe.timing import AdaptiveTimingModel
from transforms.registry import TransformFunc

logger = logging.getLogger(__name__)


class CanaryRunner:
    """Executes and validates canary transforms."""

    def __init__(
        self,
        config: ProbeConfig,
        state: ProbeState,
        transform: TransformFunc,
        storage: TempFileProvider,
        clock: Callable[[], int],
        timing: AdaptiveTimingModel,
        guard: LifecycleGuard,
    ):
        self.config = config
        self.state = state
        self.transform = transform
        self.storage = storage
        self.clock = clock
        self.timing = timing
        self.guard = guard

    def run(self, ticket: ProbeTicket) -> ProbeOutcome:
        """
        Run one canary for this probe.

        Args:
            ticket: Probe that was scheduled to run a canary

        Returns:
            ProbeOutcome (never raises for transform or storage problems)
        """
        failure = self.guard.pre_check(ticket)
        if failure is not None:
            return failure

        source: Optional[Path] = None
        target: Optional[Path] = None
        try:
            try:
                source = self._source_file()
                target = self.storage.create_temp_file(
                    "target_", f"_{self.config.target_filename}"
                )
            except StorageError as e:
                logger.error(f"{ticket.prefix}{e}")
                return ProbeOutcome.failure(ticket, ErrorKind.STORAGE_FAILURE, str(e))

            start = self.clock()
            try:
                self.transform(source, target)
            except Exception as e:
                elapsed_ms = self.clock() - start
                logger.exception(f"{ticket.prefix}Transform failed after {elapsed_ms}ms")
                failed = CanaryResult(elapsed_ms=elapsed_ms, output_size=0, passed=False)
                return self._ceiling_failure(ticket, failed) or ProbeOutcome.failure(
                    ticket,
                    ErrorKind.TRANSFORM_FAILED,
                    f"Transform failed after {elapsed_ms}ms: {e}",
                    canary=failed,
                )
            elapsed_ms = self.clock() - start

            return self._judge(ticket, target, elapsed_ms)
        finally:
            self.storage.remove(source, target)

    def _source_file(self) -> Path:
        """Fresh copy of the fixture; counts as one executed transform."""
        self.state.transforms_executed.increment()
        return self.storage.copy_fixture(self.config.source_filename)

    def _judge(self, ticket: ProbeTicket, target: Path, elapsed_ms: int) -> ProbeOutcome:
        """Validate the output and apply the timing checks."""
        message = f"Transform {elapsed_ms}ms"

        invalid, size = self._validate_target(ticket, target)
        if invalid is not None:
            failed = CanaryResult(elapsed_ms=elapsed_ms, output_size=size, passed=False)
            return self._ceiling_failure(ticket, failed) or dataclasses.replace(
                invalid, canary=failed,
            )

        # Readiness only needs one completed canary, pass or fail from here on
        self.state.initialized.set()

        self.timing.observe(elapsed_ms, ticket)

        failed = CanaryResult(elapsed_ms=elapsed_ms, output_size=size, passed=False)
        failure = self._ceiling_failure(ticket, failed)
        if failure is not None:
            return failure

        if self.timing.is_degraded(elapsed_ms):
            normal_ms, _ = self.timing.baseline()
            outcome = ProbeOutcome.failure(
                ticket,
                ErrorKind.DEGRADED,
                f"{message} which is more than {self.config.liveness_percent}% "
                f"slower than the normal value of {normal_ms}ms",
                canary=failed,
            )
            logger.warning(outcome.message)
            return outcome

        return ProbeOutcome.success(
            ticket,
            f"Success - {message}",
            canary=CanaryResult(elapsed_ms=elapsed_ms, output_size=size),
        )

    def _ceiling_failure(
        self,
        ticket: ProbeTicket,
        canary: CanaryResult,
    ) -> Optional[ProbeOutcome]:
        """
        Lifecycle post-check for a finished canary, passed or not.

        A transform that overran the duration ceiling or went past the
        transform count fails this probe with TOO_MANY_REQUESTS, whatever
        else went wrong with it.
        """
        failure = self.guard.post_check(ticket, canary.elapsed_ms)
        if failure is None:
            return None
        return dataclasses.replace(failure, canary=canary)

    def _validate_target(
        self,
        ticket: ProbeTicket,
        target: Path,
    ) -> Tuple[Optional[ProbeOutcome], int]:
        """
        Check the transform output.

        Returns:
            (failure outcome or None, output size in bytes)
        """
        if not target.is_file():
            outcome = ProbeOutcome.failure(
                ticket,
                ErrorKind.OUTPUT_MISSING,
                f'Target File "{target.resolve()}" did not exist',
            )
            logger.error(outcome.message)
            return outcome, 0

        size = target.stat().st_size
        low, high = self.config.min_expected_size, self.config.max_expected_size
        if size < low or size > high:
            outcome = ProbeOutcome.failure(
                ticket,
                ErrorKind.OUTPUT_SIZE_OUT_OF_RANGE,
                f'Target File "{target.resolve()}" was the wrong size ({size}). '
                f"Needed to be between {low} and {high}",
            )
            logger.error(outcome.message)
            return outcome, size

        return None, size


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CanaryRunner",
]
