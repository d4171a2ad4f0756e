"""Aggregate statistics for a processing run."""
from dataclasses import dataclass

_UNITS = ("Bytes", "KB", "MB", "GB")


def format_bytes(num_bytes: int) -> str:
    """Format a byte count as a human-readable string."""
    if num_bytes <= 0:
        return "0 Bytes"
    value = float(num_bytes)
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_UNITS[unit]}"


@dataclass
class BatchStats:
    """Counters accumulated over one run. Only used for reporting."""

    total_processed: int = 0
    total_input_bytes: int = 0
    total_output_bytes: int = 0
    success_count: int = 0
    error_count: int = 0

    def record_success(self, input_size: int, output_size: int) -> None:
        """Record a successfully processed item."""
        self.total_processed += 1
        self.total_input_bytes += input_size
        self.total_output_bytes += output_size
        self.success_count += 1

    def record_error(self) -> None:
        """Record an item that failed."""
        self.total_processed += 1
        self.error_count += 1

    @property
    def compression_ratio(self) -> float:
        """Compressed size as a percentage of decompressed size."""
        if not self.total_output_bytes:
            return 0.0
        return self.total_input_bytes / self.total_output_bytes * 100

    @property
    def expansion_factor(self) -> float:
        if not self.total_input_bytes:
            return 0.0
        return self.total_output_bytes / self.total_input_bytes

    def summary_lines(
        self,
        title: str,
        unit: str,
        output: str,
        input_label: str = "Total input size",
        output_label: str = "Total output size",
    ) -> list[str]:
        """Human-readable summary, one entry per line."""
        lines = [
            "",
            f"{title}:",
            f"Total {unit} processed: {self.total_processed}",
            f"  Success: {self.success_count}",
            f"  Errors: {self.error_count}",
            f"  Output: {output}",
        ]
        if self.success_count > 0:
            lines += [
                "",
                f"{input_label}: {format_bytes(self.total_input_bytes)}",
                f"{output_label}: {format_bytes(self.total_output_bytes)}",
                f"Overall compression ratio: {self.compression_ratio:.2f}%",
                f"Expansion factor: {self.expansion_factor:.2f}x",
            ]
        return lines
