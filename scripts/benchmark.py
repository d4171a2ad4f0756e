#!/usr/bin/env python3
"""Benchmark compression and decompression for every supported format."""
import argparse
import gzip
import random
import string
import sys
import time
import zlib
from pathlib import Path
from typing import Callable

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.codec.engine import DecompressionFormat, decompress
from src.jobs.stats import format_bytes

SIZES = {
    "Small": 10_000,
    "Medium": 100_000,
    "Large": 1_000_000,
}

ALPHABET = string.ascii_letters + string.digits


def generate_test_data(size: int) -> bytes:
    """Random alphanumeric payload of the given size."""
    return "".join(random.choice(ALPHABET) for _ in range(size)).encode("ascii")


def deflate_raw(data: bytes) -> bytes:
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    return compressor.compress(data) + compressor.flush()


COMPRESSORS: dict[DecompressionFormat, Callable[[bytes], bytes]] = {
    DecompressionFormat.DEFLATE: zlib.compress,
    DecompressionFormat.RAW: deflate_raw,
    DecompressionFormat.GZIP: gzip.compress,
}


def benchmark(fn: Callable[[], object], label: str, iterations: int) -> dict:
    """Time ``fn`` over several iterations and print the mean."""
    timings = []
    for _ in range(iterations):
        start = time.perf_counter()
        fn()
        timings.append(time.perf_counter() - start)
    stats = {
        "mean_ms": sum(timings) / len(timings) * 1000,
        "min_ms": min(timings) * 1000,
        "max_ms": max(timings) * 1000,
    }
    print(
        f"{label:<28} mean {stats['mean_ms']:8.3f} ms  "
        f"min {stats['min_ms']:8.3f} ms  max {stats['max_ms']:8.3f} ms"
    )
    return stats


def run(iterations: int) -> None:
    print("Generating test data...")
    datasets = {label: generate_test_data(size) for label, size in SIZES.items()}

    print("\nCompression Benchmarks:")
    compressed: dict[str, dict[DecompressionFormat, bytes]] = {}
    for label, data in datasets.items():
        compressed[label] = {}
        for fmt, compress in COMPRESSORS.items():
            benchmark(lambda: compress(data), f"{label} {fmt.value}", iterations)
            compressed[label][fmt] = compress(data)

    print("\nDecompression Benchmarks:")
    for label, blobs in compressed.items():
        for fmt, blob in blobs.items():
            benchmark(lambda: decompress(blob, fmt), f"{label} {fmt.value}", iterations)
            benchmark(lambda: decompress(blob, DecompressionFormat.AUTO), f"{label} {fmt.value} (auto)", iterations)

    print("\nCompression Ratios:")
    for label, blobs in compressed.items():
        original = len(datasets[label])
        for fmt, blob in blobs.items():
            print(
                f"{label} {fmt.value}: {format_bytes(original)} -> {format_bytes(len(blob))} "
                f"({len(blob) / original * 100:.2f}%)"
            )


def main():
    parser = argparse.ArgumentParser(description="Benchmark the decompression engine")
    parser.add_argument("--iterations", type=int, default=10, help="Runs per measurement (default: 10)")
    args = parser.parse_args()
    run(args.iterations)


if __name__ == "__main__":
    main()
