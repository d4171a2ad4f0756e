"""Error taxonomy for decoding, decompression and record extraction."""
from typing import Optional, Sequence


class DecompressorError(Exception):
    """Base class for every error raised by the pipeline."""


class EncodingError(DecompressorError):
    """Input text is not valid base64."""


class DecompressionError(DecompressorError):
    """The codec rejected the stream.

    ``format`` is the requested format, or ``"any"`` when auto-detection
    exhausted every candidate; ``attempts`` then holds one
    ``(format, message)`` pair per candidate, in trial order.
    """

    def __init__(
        self,
        format: str,
        detail: str,
        attempts: Optional[Sequence[tuple[str, str]]] = None,
    ):
        self.format = format
        self.detail = detail
        self.attempts = list(attempts or [])
        super().__init__(detail)


class MissingFieldError(DecompressorError):
    """A record lacks its required payload field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Item missing required {field} field")


class MalformedInputError(DecompressorError):
    """Top-level JSON shape is not recognised."""


class NoInputError(DecompressorError):
    """Nothing to process at all."""


class InvalidRecordError(DecompressorError):
    """A record field holds a value of the wrong type."""
