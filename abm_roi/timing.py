"""
Latency logging for the scenario pipeline.

``sync_timer`` brackets one block (the sensitivity grid) with START/END
records; ``StepTimer`` records the validate / calculate / sensitivity
steps of one evaluation and logs a total. Everything is emitted at DEBUG
under the ``[TIMING]`` tag.
"""

import logging
import time
from contextlib import contextmanager

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


@contextmanager
def sync_timer(node_name: str, action: str = "OPERATION"):
    """Log START and END (with duration) around the wrapped block."""
    logger.debug("[TIMING] %s: %s START", node_name, action)
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("[TIMING] %s: %s END — duration=%.0fms", node_name, action, _elapsed_ms(start))


class StepTimer:
    """
    Per-step durations for one evaluation, keyed by step name.

    Usage:
        timer = StepTimer("scenario")
        with timer.step("validate"):
            inputs = validate_scenario(payload)
        timer.summary()
    """

    def __init__(self, node_name: str):
        self.node_name = node_name
        self.steps: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def step(self, step_name: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            self.steps[step_name] = _elapsed_ms(start)
            logger.debug(
                "[TIMING] %s: %s — duration=%.0fms",
                self.node_name, step_name, self.steps[step_name],
            )

    def summary(self) -> float:
        """Log and return the time since construction, in milliseconds."""
        total_ms = _elapsed_ms(self._start)
        logger.debug(
            "[TIMING] %s: TOTAL — duration=%.0fms (%s)",
            self.node_name,
            total_ms,
            ", ".join(f"{name}={ms:.0f}ms" for name, ms in self.steps.items()),
        )
        return total_ms
