import logging
import time
from contextlib import contextmanager

from app.core.config import settings

logger = logging.getLogger(__name__)


class Tracer:
    """
    Minimal span recorder handed to each service through its constructor.

    Usage:
        with tracer.span("reservation.make"):
            ...

    When disabled, spans cost a single attribute check.
    """

    def __init__(self, component: str, enabled: bool = False):
        self.component = component
        self.enabled = enabled

    @contextmanager
    def span(self, name: str):
        if not self.enabled:
            yield
            return

        started = time.perf_counter()
        try:
            yield
        except Exception:
            logger.debug("span %s.%s failed after %.2f ms", self.component, name,
                         (time.perf_counter() - started) * 1000)
            raise
        logger.debug("span %s.%s took %.2f ms", self.component, name,
                     (time.perf_counter() - started) * 1000)


def build_tracer(component: str) -> Tracer:
    return Tracer(component, enabled=settings.TRACING_ENABLED)
