"""Performance profiler for codec operations."""

import time
import psutil
import logging
from typing import Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for a codec operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    throughput_mbps: float


class PerformanceProfiler:
    """
    Profiler for timing codec operations and sampling memory usage.

    Used by the CLI's ``--profile`` flag and the benchmark script.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: float = 0
        self.peak_memory: float = 0
        self.input_size = 0

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        self.start_profiling(operation_name, input_size)
        try:
            yield self
        finally:
            if self.current_operation:
                self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0):
        """Start profiling an operation."""
        self.current_operation = operation_name
        self.start_time = time.perf_counter()
        self.input_size = input_size

        self.start_memory = self._current_memory_mb()
        self.peak_memory = self.start_memory

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self):
        """Sample current memory usage."""
        if not self.current_operation:
            return
        self.peak_memory = max(self.peak_memory, self._current_memory_mb())

    def stop_profiling(self, output_size: int = 0) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Args:
            output_size: Size of output data in bytes

        Returns:
            PerformanceMetrics object with collected data
        """
        if not self.current_operation or self.start_time is None:
            raise ValueError("No active profiling session")

        end_time = time.perf_counter()
        duration = end_time - self.start_time
        end_memory = self._current_memory_mb()
        throughput = (self.input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=self.input_size,
            output_size=output_size,
            memory_peak_mb=max(self.peak_memory, end_memory),
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            throughput_mbps=throughput
        )

        self.metrics_history.append(metrics)
        self.current_operation = None
        self.start_time = None

        self.logger.info(f"{metrics.operation_name}: {duration * 1000:.2f}ms, "
                         f"memory {end_memory - metrics.memory_start_mb:+.2f}MB")
        return metrics

    @staticmethod
    def _current_memory_mb() -> float:
        return psutil.Process().memory_info().rss / 1024 / 1024
