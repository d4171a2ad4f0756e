#!/usr/bin/env python3
"""Utility script to create sample input files for every command."""
import argparse
import json
import random
import sys
import time
import zlib
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.codec.encoding import encode_base64

BATCH_SAMPLES = [
    "Hello, world!",
    "Testing batch processing",
    "This is a longer string to test compression efficiency with repetitive content. "
    "This is a longer string to test compression efficiency with repetitive content.",
    "Line number 4 with some numbers: 12345678901234567890",
    "Final test line with special characters: !@#$%^&*()_+-=[]{}|;':\",./<>?",
]

PRODUCTS = [
    (
        "365 by Whole Foods Market, Assorted Entertaining Crackers, 8.8 Ounce",
        "<h1>Product Details</h1><p>These entertaining crackers are perfect for cheese platters and appetizers.</p>",
    ),
    (
        "365 by Whole Foods Market, Cracker Cracked Wheat, 10.6 Ounce",
        "<h1>Product Information</h1><p>Whole grain crackers made with cracked wheat and sea salt.</p>",
    ),
    (
        "365 by Whole Foods Market, Cracker Pita Sea Salt, 5 Ounce",
        "<h1>About This Item</h1><p>Crispy pita crackers made with organic ingredients and sea salt.</p>",
    ),
]


def compress_and_encode(text: str) -> str:
    """Deflate (zlib-wrapped) and base64-encode a string."""
    return encode_base64(zlib.compress(text.encode("utf-8")))


def create_batch_file(output_dir: Path) -> Path:
    """Write one base64 deflate payload per line."""
    path = output_dir / "batch-test.txt"
    path.write_text("\n".join(compress_and_encode(s) for s in BATCH_SAMPLES), encoding="utf-8")
    print(f"Created test batch file at: {path}")
    print(f"It contains {len(BATCH_SAMPLES)} lines of base64-encoded compressed text")
    return path


def create_flat_json(output_dir: Path) -> Path:
    """Write the legacy flat array shape."""
    path = output_dir / "test-json-old.json"
    items = [{"rawHtml": compress_and_encode(html), "name": name} for name, html in PRODUCTS]
    path.write_text(json.dumps(items, indent=2), encoding="utf-8")
    print(f"Created flat array test JSON file at: {path}")
    return path


def create_nested_json(output_dir: Path) -> Path:
    """Write the nested Items shape with {Value: ...} wrapped fields."""
    path = output_dir / "test-json.json"
    now = datetime.now(timezone.utc)
    items = []
    for index, (name, html) in enumerate(PRODUCTS):
        fields = {
            "category": "crackers",
            "domain": "www.amazon.com",
            "entity_type": "category",
            "id": f"test-id-{random.randint(0, 999)}",
            "imageUrl": "https://example.com/image.jpg",
            "isSponsored": index == 1,
            "name": name,
            "originalPrice": "$5.99",
            "price": "$4.99",
            "rawHtml": compress_and_encode(html),
            "rawTextContent": f"Plain text version of {name}",
            "shipping": "Free shipping with Prime",
            "timestamp": now.isoformat(),
            "ttl": str(int(time.time()) + 86400),
            "url": f"https://example.com/product-{index + 1}",
        }
        items.append({key: {"Value": value} for key, value in fields.items()})

    document = {"Items": items, "Count": len(items), "ScannedCount": len(items)}
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    print(f"Created nested test JSON file at: {path}")
    return path


def main():
    parser = argparse.ArgumentParser(description="Create sample input files")
    parser.add_argument(
        "--output-dir",
        default="test-data",
        help="Directory for the generated files (default: test-data)",
    )
    parser.add_argument(
        "--only",
        choices=["batch", "json"],
        default=None,
        help="Create only the batch file or only the JSON files",
    )
    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if args.only in (None, "batch"):
        create_batch_file(output_dir)
    if args.only in (None, "json"):
        create_flat_json(output_dir)
        create_nested_json(output_dir)


if __name__ == "__main__":
    main()
