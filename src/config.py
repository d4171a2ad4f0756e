"""Configuration management from environment variables."""
import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()

FORMATS = ("auto", "deflate", "raw", "gzip")


class Config:
    """Application configuration."""

    # Decompression
    DEFAULT_FORMAT: str = os.getenv("DECOMPRESS_FORMAT", "auto")

    # Batch mode
    BATCH_OUTPUT_DIR: str = os.getenv("BATCH_OUTPUT_DIR", "./output")
    BATCH_PREFIX: str = os.getenv("BATCH_PREFIX", "decompressed_")
    BATCH_SEPARATOR: str = os.getenv("BATCH_SEPARATOR", "\n---\n")

    # JSON mode
    JSON_OUTPUT: str = os.getenv("JSON_OUTPUT", "-")

    # Logging
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "%(message)s")
    DEBUG_LOG_FORMAT: str = os.getenv(
        "DEBUG_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration."""
        errors = []
        if cls.DEFAULT_FORMAT not in FORMATS:
            errors.append(
                f"DECOMPRESS_FORMAT must be one of {', '.join(FORMATS)} (got {cls.DEFAULT_FORMAT!r})"
            )
        if not cls.BATCH_PREFIX:
            errors.append("BATCH_PREFIX must not be empty")
        if not cls.BATCH_OUTPUT_DIR:
            errors.append("BATCH_OUTPUT_DIR must not be empty")
        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")


config = Config()
