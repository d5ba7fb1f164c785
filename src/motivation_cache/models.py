from dataclasses import dataclass

from motivation_cache.entities import MessageSource


@dataclass
class ResolutionStats:
    """Track how message requests were resolved."""

    ia_count: int = 0
    cache_count: int = 0
    refresh_count: int = 0
    generator_calls: int = 0
    generator_failures: int = 0
    total_generation_time_ms: float = 0.0

    @property
    def total_resolutions(self) -> int:
        return self.ia_count + self.cache_count + self.refresh_count

    @property
    def reuse_rate(self) -> float:
        """Share of resolutions answered from the store."""
        if self.total_resolutions == 0:
            return 0.0
        return self.cache_count / self.total_resolutions

    @property
    def avg_generation_time_ms(self) -> float:
        """Calculate average generator latency."""
        if self.generator_calls == 0:
            return 0.0
        return self.total_generation_time_ms / self.generator_calls

    def record_resolution(self, source: MessageSource) -> None:
        """Record a successful resolution."""
        if source is MessageSource.IA:
            self.ia_count += 1
        elif source is MessageSource.CACHE:
            self.cache_count += 1
        else:
            self.refresh_count += 1

    def record_generation(self, duration_ms: float) -> None:
        """Record a generator call, successful or not."""
        self.generator_calls += 1
        self.total_generation_time_ms += duration_ms

    def record_failure(self) -> None:
        """Record a failed generator call."""
        self.generator_failures += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert stats to dictionary."""
        return {
            "total_resolutions": self.total_resolutions,
            "ia": self.ia_count,
            "cache": self.cache_count,
            "refresh": self.refresh_count,
            "reuse_rate": self.reuse_rate,
            "generator_calls": self.generator_calls,
            "generator_failures": self.generator_failures,
            "avg_generation_time_ms": self.avg_generation_time_ms,
        }
