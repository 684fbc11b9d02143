"""Metrics collected by decode and encode passes."""

import time
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class CodecMetrics:
    """Counters and timing for a single decode or encode call."""

    tokens_processed: int = 0
    elements_processed: int = 0
    payload_tokens: int = 0
    processing_time_ms: float = 0.0
    element_counts: Dict[str, int] = field(default_factory=dict)
    started_at: float = field(default_factory=time.perf_counter)

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_processed * 1000.0) / self.processing_time_ms

    def add_element(self, name: str) -> None:
        """Count one structural element of the given kind."""
        self.elements_processed += 1
        self.element_counts[name] = self.element_counts.get(name, 0) + 1

    def finish(self) -> None:
        """Record elapsed time since the metrics object was created."""
        self.processing_time_ms = (time.perf_counter() - self.started_at) * 1000.0
