"""Job runners for the three CLI commands."""
import logging
import random
from typing import BinaryIO, Optional, Union
import orjson

from src.codec.engine import DecompressionFormat, decompress
from src.codec.errors import MalformedInputError, NoInputError
from src.jobs.processor import ProcessOptions, process_lines, process_records
from src.jobs.sampling import sample_items
from src.jobs.stats import BatchStats
from src.logging_conf import LogOptions, notice
from src.parse.records import locate_items
from src.store.readers import read_input, read_lines
from src.store.sinks import (
    STDOUT_MARKER,
    DirectorySink,
    FileSink,
    SeparatedStreamSink,
    StreamSink,
    YamlSink,
)

logger = logging.getLogger(__name__)


class DecompressRunner:
    """Decompresses a single input stream."""

    def __init__(
        self,
        input_path: Optional[str] = None,
        output_path: Optional[str] = None,
        format: DecompressionFormat = DecompressionFormat.AUTO,
        as_text: bool = False,
        log: LogOptions = LogOptions(),
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
    ):
        self.input_path = input_path
        self.format = DecompressionFormat(format)
        self.as_text = as_text
        self.log = log
        self.stdin = stdin
        self.sink: Union[FileSink, StreamSink] = (
            FileSink(output_path) if output_path else StreamSink(stdout)
        )

    async def run(self) -> None:
        data = await read_input(self.input_path, self.stdin)
        if not data:
            raise NoInputError("No input data received")
        result = decompress(data, self.format, self.as_text, self.log)
        await self.sink.write(result)


class BatchRunner:
    """Decompresses newline-delimited base64 entries from a file."""

    def __init__(
        self,
        input_path: str,
        output_dir: str = "./output",
        prefix: str = "decompressed_",
        separator: str = "\n---\n",
        format: DecompressionFormat = DecompressionFormat.AUTO,
        summary: bool = False,
        log: LogOptions = LogOptions(),
        stdout: Optional[BinaryIO] = None,
    ):
        self.input_path = input_path
        self.summary = summary
        self.log = log
        self.options = ProcessOptions(format=DecompressionFormat(format), as_text=False, log=log)
        self.sink: Union[DirectorySink, SeparatedStreamSink]
        if output_dir == STDOUT_MARKER:
            self.sink = SeparatedStreamSink(separator, stdout)
        else:
            self.sink = DirectorySink(output_dir, prefix)

    async def run(self) -> BatchStats:
        """Read every line, process them in order, then report."""
        self.sink.prepare()

        logger.info(f"Processing batch file: {self.input_path}")
        lines = await read_lines(self.input_path)
        if not lines:
            raise NoInputError("No data found in input file")
        logger.info(f"Found {len(lines)} lines to process")

        stats = await process_lines(lines, self.options, self.sink)
        self._report(stats)
        return stats

    def _report(self, stats: BatchStats) -> None:
        if self.summary or self.log.verbose:
            for line in stats.summary_lines(
                "Batch Processing Summary",
                unit="files",
                output=self._output_label(),
            ):
                notice(logger, line)
        if not self.log.quiet:
            notice(
                logger,
                f"Batch processing complete: {stats.success_count} successful, "
                f"{stats.error_count} errors ({self.sink.describe()})",
            )

    def _output_label(self) -> str:
        if isinstance(self.sink, DirectorySink):
            return str(self.sink.directory)
        return "stdout"


class JsonRunner:
    """Decompresses the HTML payloads of JSON records and writes YAML."""

    def __init__(
        self,
        input_path: Optional[str] = None,
        output: str = STDOUT_MARKER,
        format: DecompressionFormat = DecompressionFormat.AUTO,
        sample: Optional[int] = None,
        summary: bool = False,
        log: LogOptions = LogOptions(),
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        rng: Optional[random.Random] = None,
    ):
        self.input_path = input_path
        self.sample = sample
        self.summary = summary
        self.log = log
        self.stdin = stdin
        self.rng = rng
        self.options = ProcessOptions(format=DecompressionFormat(format), as_text=True, log=log)
        self.sink = YamlSink(output, stdout)

    async def run(self) -> BatchStats:
        """Read, locate, optionally sample, process, then write one YAML list."""
        self.sink.prepare()

        content = await read_input(self.input_path, self.stdin)
        try:
            data = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise MalformedInputError(f"Failed to parse JSON: {e}") from e

        sources = locate_items(data)
        if not sources:
            await self.sink.write([])
            self._report_empty()
            return BatchStats()

        logger.info(f"Found {len(sources)} items to process")
        if self.sample is not None and 0 < self.sample < len(sources):
            logger.info(f"Sampling {self.sample} items from {len(sources)} total items")
            sources = sample_items(sources, self.sample, self.rng)
            logger.info(f"Selected {len(sources)} items for processing")

        outputs, stats = process_records(sources, self.options)
        await self.sink.write([record.to_output() for record in outputs])
        self._report(stats)
        return stats

    def _report_empty(self) -> None:
        if self.summary or self.log.verbose:
            notice(logger, "\nJSON Processing Summary:")
            notice(logger, "No items found to process")
            notice(logger, f"Output: {'stdout' if self.sink.to_stdout else self.sink.destination}")
        if not self.log.quiet:
            notice(logger, "JSON processing complete: No items to process")

    def _report(self, stats: BatchStats) -> None:
        if self.summary or self.log.verbose:
            for line in stats.summary_lines(
                "JSON Processing Summary",
                unit="items",
                output="stdout" if self.sink.to_stdout else self.sink.destination,
                input_label="Total compressed size",
                output_label="Total decompressed size",
            ):
                notice(logger, line)
        if not self.log.quiet:
            notice(
                logger,
                f"JSON processing complete: {stats.success_count} successful, "
                f"{stats.error_count} errors ({self.sink.describe()})",
            )
