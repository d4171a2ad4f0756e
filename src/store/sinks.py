"""Output destinations for decompressed data."""
import logging
import sys
from pathlib import Path
from typing import Any, BinaryIO, Optional, Sequence
import aiofiles
import yaml

from src.codec.engine import Payload

logger = logging.getLogger(__name__)

STDOUT_MARKER = "-"
YAML_SUFFIXES = (".yml", ".yaml")
ITEMS_FILENAME = "items.yaml"


def _as_bytes(payload: Payload) -> bytes:
    return payload.encode("utf-8") if isinstance(payload, str) else payload


def _stdout() -> BinaryIO:
    return sys.stdout.buffer


class StreamSink:
    """Writes a payload to a binary stream (stdout by default)."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream or _stdout()

    async def write(self, payload: Payload) -> None:
        self.stream.write(_as_bytes(payload))
        self.stream.flush()


class FileSink:
    """Writes a payload to a single file."""

    def __init__(self, path: str):
        self.path = Path(path)

    async def write(self, payload: Payload) -> None:
        async with aiofiles.open(self.path, "wb") as f:
            await f.write(_as_bytes(payload))
        logger.info(f"Output written to {self.path}")


class DirectorySink:
    """One file per entry: ``<dir>/<prefix><index>.txt``."""

    def __init__(self, directory: str, prefix: str):
        self.directory = Path(directory)
        self.prefix = prefix

    def prepare(self) -> None:
        """Create the output directory."""
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Output directory: {self.directory}")

    def path_for(self, index: int) -> Path:
        return self.directory / f"{self.prefix}{index}.txt"

    async def write(self, index: int, payload: Payload) -> None:
        path = self.path_for(index)
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            await f.write(_as_bytes(payload))
        logger.info(f"Written to {path}")

    def describe(self) -> str:
        return f"output in: {self.directory}"


class SeparatedStreamSink:
    """All entries to one stream, separated by ``separator``."""

    def __init__(self, separator: str, stream: Optional[BinaryIO] = None):
        self.separator = separator
        self.stream = stream or _stdout()
        self.written = 0

    def prepare(self) -> None:
        logger.info(f"Output: stdout (separator: {self.separator!r})")

    async def write(self, index: int, payload: Payload) -> None:
        data = _as_bytes(payload)
        if self.written:
            data = self.separator.encode("utf-8") + data
        self.stream.write(data)
        self.stream.flush()
        self.written += 1

    def describe(self) -> str:
        return "output to stdout"


def dump_yaml(items: Sequence[Any]) -> str:
    """Serialize a list as a single YAML document."""
    return yaml.safe_dump(
        list(items),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


class YamlSink:
    """Writes a list as YAML to stdout, a ``.yml``/``.yaml`` file, or a directory.

    Any destination other than ``-`` without a YAML suffix is a directory
    that receives ``items.yaml``.
    """

    def __init__(self, destination: str = STDOUT_MARKER, stream: Optional[BinaryIO] = None):
        self.destination = destination
        self._stream = stream

    @property
    def to_stdout(self) -> bool:
        return self.destination == STDOUT_MARKER

    @property
    def is_file(self) -> bool:
        return not self.to_stdout and self.destination.endswith(YAML_SUFFIXES)

    @property
    def target(self) -> Optional[Path]:
        """File that will be written, or None for stdout."""
        if self.to_stdout:
            return None
        if self.is_file:
            return Path(self.destination)
        return Path(self.destination) / ITEMS_FILENAME

    def prepare(self) -> None:
        """Create the directory the YAML file will live in."""
        target = self.target
        if target is None:
            logger.info("Output: stdout")
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        if self.is_file:
            logger.info(f"Output file: {target}")
        else:
            logger.info(f"Output directory: {target.parent}")

    async def write(self, items: Sequence[Any]) -> None:
        content = dump_yaml(items)
        target = self.target
        if target is None:
            stream = self._stream or _stdout()
            stream.write(content.encode("utf-8"))
            stream.flush()
            return
        async with aiofiles.open(target, "w", encoding="utf-8") as f:
            await f.write(content)
        logger.info(f"Written to {target}")

    def describe(self) -> str:
        if self.to_stdout:
            return "output to stdout"
        if self.is_file:
            return f"output to: {self.destination}"
        return f"output in: {self.destination}"
