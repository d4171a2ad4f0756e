"""Main entry point with CLI."""
import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from src.codec.engine import DecompressionFormat
from src.codec.errors import DecompressorError
from src.config import Config, FORMATS, config
from src.jobs.runner import BatchRunner, DecompressRunner, JsonRunner
from src.logging_conf import LogOptions, setup_logging

logger = logging.getLogger(__name__)

PROG = "payload-inflate"
COMMANDS = ("decompress", "batch", "parse-json")
DEFAULT_COMMAND = "decompress"


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default=config.DEFAULT_FORMAT,
        help=f"Compression format (default: {config.DEFAULT_FORMAT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress all non-error output")
    parser.add_argument("-d", "--debug", action="store_true", help="Show detailed error information")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its three sub-commands."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Decompress deflate, raw deflate and gzip data",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Single stream
    single = subparsers.add_parser("decompress", help="Decompress a single input stream")
    single.add_argument("-i", "--input", default=None, help="Input file (default: stdin)")
    single.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    single.add_argument(
        "-s", "--string",
        action="store_true",
        help="Decode the decompressed bytes as UTF-8 text",
    )
    _add_common_flags(single)

    # Batch of base64 lines
    batch = subparsers.add_parser(
        "batch",
        help="Process a file with base64-encoded, newline-delimited compressed data",
    )
    batch.add_argument(
        "-i", "--input",
        required=True,
        help="Input file containing base64 encoded data (one per line)",
    )
    batch.add_argument(
        "-o", "--output-dir",
        default=config.BATCH_OUTPUT_DIR,
        help=f"Output directory, or '-' for stdout (default: {config.BATCH_OUTPUT_DIR})",
    )
    batch.add_argument(
        "-p", "--prefix",
        default=config.BATCH_PREFIX,
        help=f"Filename prefix for output files (default: {config.BATCH_PREFIX})",
    )
    batch.add_argument(
        "--separator",
        default=config.BATCH_SEPARATOR,
        help="Separator between entries when writing to stdout (default: newline, ---, newline)",
    )
    batch.add_argument("-s", "--summary", action="store_true", help="Show summary statistics")
    _add_common_flags(batch)

    # JSON records to YAML
    parse_json = subparsers.add_parser(
        "parse-json",
        help="Process a JSON file with items containing base64-encoded rawHtml",
    )
    parse_json.add_argument("-i", "--input", default=None, help="Input JSON file, or '-' for stdin")
    parse_json.add_argument(
        "-o", "--output",
        default=config.JSON_OUTPUT,
        help="Output .yaml/.yml file, directory, or '-' for stdout (default: -)",
    )
    parse_json.add_argument(
        "--sample",
        type=int,
        default=None,
        help="Process only a random sample of N items (0 or less processes all)",
    )
    parse_json.add_argument("-s", "--summary", action="store_true", help="Show summary statistics")
    _add_common_flags(parse_json)

    return parser


def with_default_command(argv: Sequence[str]) -> list[str]:
    """Insert the default sub-command unless one is named or help is asked."""
    argv = list(argv)
    if argv and (argv[0] in COMMANDS or argv[0] in ("-h", "--help")):
        return argv
    return [DEFAULT_COMMAND, *argv]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    if argv is None:
        argv = sys.argv[1:]
    return build_parser().parse_args(with_default_command(argv))


def _make_runner(args: argparse.Namespace, log: LogOptions):
    fmt = DecompressionFormat(args.format)
    if args.command == "batch":
        return BatchRunner(
            input_path=args.input,
            output_dir=args.output_dir,
            prefix=args.prefix,
            separator=args.separator,
            format=fmt,
            summary=args.summary,
            log=log,
        ), "Error in batch processing"
    if args.command == "parse-json":
        return JsonRunner(
            input_path=args.input,
            output=args.output,
            format=fmt,
            sample=args.sample,
            summary=args.summary,
            log=log,
        ), "Error in JSON processing"
    return DecompressRunner(
        input_path=args.input,
        output_path=args.output,
        format=fmt,
        as_text=args.string,
        log=log,
    ), "Fatal error"


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    log = LogOptions(verbose=args.verbose, quiet=args.quiet, debug=args.debug)
    setup_logging(log)

    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    runner, failure_label = _make_runner(args, log)
    try:
        asyncio.run(runner.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)
    except (DecompressorError, OSError) as e:
        logger.error(f"{failure_label}: {e}", exc_info=log.debug)
        sys.exit(1)


if __name__ == "__main__":
    main()
