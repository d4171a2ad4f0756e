"""Compression helpers for building test payloads."""
import base64
import gzip
import zlib


def deflate(text: str) -> bytes:
    return zlib.compress(text.encode("utf-8"))


def deflate_raw(text: str) -> bytes:
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    return compressor.compress(text.encode("utf-8")) + compressor.flush()


def gzip_bytes(text: str) -> bytes:
    return gzip.compress(text.encode("utf-8"))


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
