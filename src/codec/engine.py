"""Decompression engine with format auto-detection."""
import gzip
import logging
import zlib
from enum import Enum
from typing import Callable, Union

from src.codec.errors import DecompressionError
from src.logging_conf import LogOptions

logger = logging.getLogger(__name__)

Payload = Union[bytes, str]

PREVIEW_CHARS = 100
HEAD_BYTES = 16


class DecompressionFormat(str, Enum):
    AUTO = "auto"
    DEFLATE = "deflate"
    RAW = "raw"
    GZIP = "gzip"


def _inflate(data: bytes) -> bytes:
    return zlib.decompress(data)


def _inflate_raw(data: bytes) -> bytes:
    return zlib.decompress(data, wbits=-zlib.MAX_WBITS)


def _gunzip(data: bytes) -> bytes:
    return gzip.decompress(data)


DECODERS: dict[DecompressionFormat, Callable[[bytes], bytes]] = {
    DecompressionFormat.DEFLATE: _inflate,
    DecompressionFormat.RAW: _inflate_raw,
    DecompressionFormat.GZIP: _gunzip,
}

# Trial order for auto-detection. Raw deflate has no header to reject
# garbage with, so it goes last.
AUTO_ORDER: tuple[DecompressionFormat, ...] = (
    DecompressionFormat.GZIP,
    DecompressionFormat.DEFLATE,
    DecompressionFormat.RAW,
)

# gzip raises BadGzipFile (an OSError) or EOFError on truncation.
CODEC_ERRORS = (zlib.error, OSError, EOFError)


def _decode_with(fmt: DecompressionFormat, data: bytes) -> bytes:
    """Run a single codec, translating its failure into DecompressionError."""
    if not data:
        raise DecompressionError(fmt.value, "No input data to decompress")
    try:
        return DECODERS[fmt](data)
    except CODEC_ERRORS as e:
        raise DecompressionError(fmt.value, str(e) or type(e).__name__) from e


def _decode_auto(data: bytes, log: LogOptions) -> bytes:
    attempts: list[tuple[str, str]] = []
    for fmt in AUTO_ORDER:
        try:
            result = _decode_with(fmt, data)
        except DecompressionError as e:
            attempts.append((fmt.value, e.detail))
            continue
        logger.info(f"Successfully decompressed with {fmt.value} format")
        return result

    if log.debug:
        logger.debug("All decompression attempts failed:")
        for fmt_name, message in attempts:
            logger.debug(f"- {fmt_name}: {message}")
    raise DecompressionError("any", "Failed to decompress with any format", attempts)


def decompress(
    data: bytes,
    fmt: DecompressionFormat = DecompressionFormat.AUTO,
    as_text: bool = False,
    log: LogOptions = LogOptions(),
) -> Payload:
    """Decompress ``data`` with ``fmt``, returning bytes or UTF-8 text.

    An explicit format uses exactly that codec. ``auto`` tries gzip, then
    zlib-wrapped deflate, then raw deflate and returns the first success.
    The text/bytes choice is made here once; malformed UTF-8 sequences are
    replaced rather than rejected.
    """
    fmt = DecompressionFormat(fmt)
    logger.info(f"Using format: {fmt.value}")
    logger.info(f"Input data size: {len(data)} bytes")
    if log.debug:
        logger.debug(f"First {HEAD_BYTES} bytes of input: {data[:HEAD_BYTES].hex(' ')}")

    if fmt is DecompressionFormat.AUTO:
        raw = _decode_auto(data, log)
    else:
        raw = _decode_with(fmt, data)
        logger.debug(f"Successfully decompressed with {fmt.value} format")

    result: Payload = raw.decode("utf-8", errors="replace") if as_text else raw
    _log_stats(result, len(data), log)
    return result


def _log_stats(result: Payload, input_size: int, log: LogOptions) -> None:
    """Log sizes, ratio and a short preview of the decompressed data."""
    output_size = len(result)
    if isinstance(result, str):
        logger.info(f"Decompressed to string, length: {output_size} characters")
    else:
        logger.info(f"Decompressed data size: {output_size} bytes")

    if output_size and input_size:
        ratio = input_size / output_size * 100
        expansion = output_size / input_size
        logger.info(f"Compression ratio: {ratio:.2f}% ({expansion:.2f}x expansion)")

    if log.debug:
        if isinstance(result, str):
            logger.debug(f"String preview: {result[:PREVIEW_CHARS]}")
        else:
            preview = result[:PREVIEW_CHARS].decode("utf-8", errors="replace")
            logger.debug(f"Decompressed data preview: {preview}")
