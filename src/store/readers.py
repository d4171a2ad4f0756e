"""Read input from files or stdin."""
import asyncio
import logging
import sys
from typing import BinaryIO, Optional
import aiofiles

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _is_stdin(path: Optional[str]) -> bool:
    return not path or path == STDIN_MARKER


async def read_input(path: Optional[str] = None, stdin: Optional[BinaryIO] = None) -> bytes:
    """Read the whole input into memory (file, or stdin for None/'-')."""
    if _is_stdin(path):
        logger.info("Reading from stdin")
        stream = stdin or sys.stdin.buffer
        return await asyncio.to_thread(stream.read)

    logger.info(f"Reading input file: {path}")
    async with aiofiles.open(path, "rb") as f:
        return await f.read()


async def read_lines(path: str) -> list[str]:
    """Read a file line by line, without line terminators.

    Bytes that are not valid UTF-8 become U+FFFD, so a damaged line fails
    base64 decoding on its own instead of aborting the read.
    """
    lines = []
    async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
        async for line in f:
            lines.append(line.rstrip("\r\n"))
    return lines
