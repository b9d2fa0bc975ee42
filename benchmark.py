#!/usr/bin/env python3
"""
Benchmark suite for JSON type codec performance analysis.

Measures encode and decode throughput for datasets of increasing size
and a growing share of registered types.
"""

import json
import statistics
from datetime import datetime, timedelta
from typing import Any, Dict
from json_typecodec import TypeCodec, extended_registry
from json_typecodec.profiler import PerformanceProfiler


class BenchmarkSuite:
    """Benchmark suite for the JSON type codec."""

    def __init__(self, repeats: int = 5):
        """Initialize the benchmark suite."""
        self.repeats = repeats
        self.profiler = PerformanceProfiler()

    def create_test_dataset(self, size_category: str) -> Dict[str, Any]:
        """Create test datasets of different sizes."""
        counts = {"small": 100, "medium": 2000, "large": 20000}
        if size_category not in counts:
            raise ValueError(f"Unknown size category: {size_category}")

        start = datetime(2024, 1, 1)
        return {
            "events": [
                {
                    "id": i,
                    "at": start + timedelta(minutes=i),
                    "labels": {f"label_{i % 7}", f"group_{i % 3}"},
                    "payload": {"value": i * 1.5, "text": f"event {i}"},
                }
                for i in range(counts[size_category])
            ]
        }

    def benchmark_dataset_sizes(self) -> Dict[str, Dict[str, float]]:
        """Benchmark encode and decode across dataset sizes."""
        print("📊 Benchmarking Dataset Sizes...")
        codec = TypeCodec(extended_registry)
        results = {}

        for category in ("small", "medium", "large"):
            print(f"   Testing {category} dataset...")
            dataset = self.create_test_dataset(category)
            encoded = codec.encode(dataset)
            input_size = len(json.dumps(encoded))

            encode_times = []
            decode_times = []
            for _ in range(self.repeats):
                with self.profiler.profile_operation(f"encode_{category}", input_size) as profiler:
                    codec.encode(dataset)
                    profiler.sample_performance()
                    profiler.stop_profiling(output_size=input_size)
                encode_times.append(self.profiler.metrics_history[-1].duration)

                with self.profiler.profile_operation(f"decode_{category}", input_size) as profiler:
                    codec.decode(encoded)
                    profiler.sample_performance()
                decode_times.append(self.profiler.metrics_history[-1].duration)

            results[category] = {
                "input_kb": input_size / 1024,
                "encode_ms": statistics.median(encode_times) * 1000,
                "decode_ms": statistics.median(decode_times) * 1000,
                "peak_memory_mb": max(m.memory_peak_mb for m in self.profiler.metrics_history[-2:]),
            }

        return results

    def print_results(self, results: Dict[str, Dict[str, float]], title: str):
        """Print benchmark results in a table."""
        print(f"\n📈 {title}")
        print("=" * 70)
        header = f"{'Dataset':<10}{'Size (KB)':>12}{'Encode (ms)':>14}{'Decode (ms)':>14}{'Peak MB':>12}"
        print(header)
        print("-" * len(header))
        for category, data in results.items():
            print(f"{category:<10}{data['input_kb']:>12.1f}{data['encode_ms']:>14.2f}"
                  f"{data['decode_ms']:>14.2f}{data['peak_memory_mb']:>12.1f}")


def main():
    """Run the benchmark suite."""
    print("🚀 JSON Type Codec Benchmark Suite")
    print("=" * 60)
    suite = BenchmarkSuite()
    suite.print_results(suite.benchmark_dataset_sizes(), "Dataset Size Scaling")


if __name__ == "__main__":
    main()
