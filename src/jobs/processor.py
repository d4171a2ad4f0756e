"""Sequential per-record processing with error isolation."""
import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Protocol, Sequence

from src.codec.encoding import decode_base64
from src.codec.engine import DecompressionFormat, Payload, decompress
from src.codec.errors import DecompressorError
from src.jobs.stats import BatchStats
from src.logging_conf import LogOptions
from src.parse.models import OutputRecord
from src.parse.records import RecordSource, normalize_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessOptions:
    """Options for one processing run."""

    format: DecompressionFormat = DecompressionFormat.AUTO
    as_text: bool = False
    log: LogOptions = field(default_factory=LogOptions)


class PayloadSink(Protocol):
    async def write(self, index: int, payload: Payload) -> None: ...


def _log_failure(label: str, index: int, error: Exception, log: LogOptions) -> None:
    logger.error(f"Error processing {label} {index}: {error}", exc_info=log.debug)


def decode_and_decompress(text: str, options: ProcessOptions) -> tuple[int, Payload]:
    """Decode one base64 payload and decompress it. Returns (input size, payload)."""
    data = decode_base64(text)
    logger.info(f"Decoded {len(text)} base64 characters to {len(data)} bytes")
    return len(data), decompress(data, options.format, options.as_text, options.log)


def to_output_record(source: RecordSource, options: ProcessOptions) -> tuple[int, OutputRecord]:
    """Normalize, decode and decompress one located item."""
    record = normalize_record(source)
    # rawHtml is always text
    input_size, payload = decode_and_decompress(record.compressed_html, replace(options, as_text=True))

    fields = record.model_dump(exclude={"compressed_html"})
    if not fields["url"] and record.domain:
        fields["url"] = f"https://{record.domain}"
    return input_size, OutputRecord(**fields, raw_html=payload)


def process_records(
    sources: Sequence[RecordSource],
    options: Optional[ProcessOptions] = None,
) -> tuple[list[OutputRecord], BatchStats]:
    """Process located items in order.

    A failing item is logged with its 1-based index, counted, and skipped;
    the remaining items are still processed.
    """
    options = options or ProcessOptions()
    stats = BatchStats()
    outputs: list[OutputRecord] = []

    for index, source in enumerate(sources, start=1):
        try:
            input_size, output = to_output_record(source, options)
        except DecompressorError as e:
            stats.record_error()
            _log_failure("item", index, e, options.log)
            continue
        outputs.append(output)
        stats.record_success(input_size, len(output.raw_html or ""))

    return outputs, stats


async def process_lines(
    lines: Sequence[str],
    options: ProcessOptions,
    sink: PayloadSink,
) -> BatchStats:
    """Decompress newline-delimited base64 entries and hand each to ``sink``.

    Blank lines are skipped but still count towards the 1-based index.
    Each entry is written before the next one is decoded; a decode,
    decompression or write failure only affects its own entry.
    """
    stats = BatchStats()

    for index, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue

        logger.info(f"Processing line {index}")
        try:
            input_size, payload = decode_and_decompress(line, options)
            await sink.write(index, payload)
        except (DecompressorError, OSError) as e:
            stats.record_error()
            _log_failure("line", index, e, options.log)
            continue
        stats.record_success(input_size, len(payload))

    return stats
