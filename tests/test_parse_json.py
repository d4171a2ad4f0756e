"""Tests for the parse-json command."""
import asyncio
import json
import random

import pytest
import yaml
from src.jobs.runner import JsonRunner
from src.main import main

from helpers import b64, deflate

HTML = "<h1>Test HTML</h1><p>This is a test</p>"


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _nested_item(name, html=HTML, **extra):
    item = {
        "category": {"Value": "crackers"},
        "domain": {"Value": "www.amazon.com"},
        "rawHtml": {"Value": b64(deflate(html))},
        "name": {"Value": name},
    }
    item.update({key: {"Value": value} for key, value in extra.items()})
    return item


def test_flat_array_to_yaml_file(tmp_path):
    """Flat legacy array written to a single .yaml file."""
    source = _write_json(
        tmp_path / "old.json",
        [{"rawHtml": b64(deflate("hi")), "name": "Test Product 1", "id": "test-id-1"}],
    )
    target = tmp_path / "output.yaml"

    main(["parse-json", "-i", str(source), "-o", str(target)])

    items = yaml.safe_load(target.read_text(encoding="utf-8"))
    assert len(items) == 1
    assert items[0]["id"] == "test-id-1"
    assert items[0]["name"] == "Test Product 1"
    assert items[0]["rawHtml"] == "hi"


def test_nested_items_to_stdout(tmp_path, stdout_buffer):
    """Nested {Value: ...} fields are unwrapped."""
    source = _write_json(
        tmp_path / "new.json",
        {"Items": [_nested_item("X")], "Count": 1, "ScannedCount": 1},
    )

    main(["parse-json", "-i", str(source), "-o", "-"])

    items = yaml.safe_load(stdout_buffer.getvalue())
    assert items[0]["category"] == "crackers"
    assert items[0]["name"] == "X"
    assert items[0]["id"] == "x"
    assert items[0]["url"] == "https://www.amazon.com"
    assert items[0]["rawHtml"] == HTML


def test_product_value_variant(tmp_path):
    """Payload nested under product.Value."""
    data = {
        "Items": [
            {
                "category": {"Value": "test-category"},
                "product": {
                    "Value": {
                        "rawHtml": {"Value": b64(deflate(HTML))},
                        "name": {"Value": "Test Product 1"},
                        "id": {"Value": "test-id-1"},
                    }
                },
            }
        ],
        "Count": 1,
        "ScannedCount": 1,
    }
    source = _write_json(tmp_path / "new.json", data)
    out_dir = tmp_path / "yaml-out"

    main(["parse-json", "-i", str(source), "-o", str(out_dir)])

    items = yaml.safe_load((out_dir / "items.yaml").read_text(encoding="utf-8"))
    assert items == [
        {
            "id": "test-id-1",
            "name": "Test Product 1",
            "category": "test-category",
            "url": None,
            "imageUrl": None,
            "rawHtml": HTML,
        }
    ]


def test_optional_fields_are_carried(tmp_path):
    """Price, sponsorship and text content survive into the YAML."""
    item = _nested_item(
        "Y",
        price="$4.99",
        originalPrice="$5.99",
        isSponsored=True,
        rawTextContent="Plain text version of Y",
    )
    source = _write_json(tmp_path / "new.json", {"Items": [item], "Count": 1, "ScannedCount": 1})
    target = tmp_path / "out.yml"

    main(["parse-json", "-i", str(source), "-o", str(target)])

    record = yaml.safe_load(target.read_text(encoding="utf-8"))[0]
    assert record["price"] == "$4.99"
    assert record["originalPrice"] == "$5.99"
    assert record["isSponsored"] is True
    assert record["rawTextContent"] == "Plain text version of Y"
    assert record["domain"] == "www.amazon.com"


@pytest.mark.parametrize("data", [{"Items": []}, {"Items": None}, []])
def test_empty_input_writes_empty_list(tmp_path, data):
    """Empty inputs produce an empty YAML list and exit normally."""
    source = _write_json(tmp_path / "empty.json", data)
    target = tmp_path / "out.yaml"

    main(["parse-json", "-i", str(source), "-o", str(target)])

    assert yaml.safe_load(target.read_text(encoding="utf-8")) == []


def test_empty_input_to_directory(tmp_path):
    """Test the empty case follows the directory destination rule."""
    source = _write_json(tmp_path / "empty.json", {"Items": [], "Count": 0, "ScannedCount": 0})
    out_dir = tmp_path / "out"

    main(["parse-json", "-i", str(source), "-o", str(out_dir)])

    assert yaml.safe_load((out_dir / "items.yaml").read_text()) == []


def test_malformed_shape_exits_1(tmp_path, capsys):
    """An object without Items is rejected."""
    source = _write_json(tmp_path / "bad.json", {"Records": []})
    with pytest.raises(SystemExit) as exc_info:
        main(["parse-json", "-i", str(source), "-o", str(tmp_path / "o.yaml")])
    assert exc_info.value.code == 1
    assert "Error in JSON processing" in capsys.readouterr().err


def test_invalid_json_exits_1(tmp_path, capsys):
    """Test unparsable JSON."""
    source = tmp_path / "bad.json"
    source.write_text("{not json")
    with pytest.raises(SystemExit) as exc_info:
        main(["parse-json", "-i", str(source)])
    assert exc_info.value.code == 1
    assert "Failed to parse JSON" in capsys.readouterr().err


def test_missing_payload_is_skipped(tmp_path, capsys):
    """An item without rawHtml is counted as an error and skipped."""
    items = [
        {"rawHtml": b64(deflate("a")), "name": "A"},
        {"name": "B"},
        {"rawHtml": b64(deflate("c")), "name": "C"},
    ]
    source = _write_json(tmp_path / "items.json", items)
    target = tmp_path / "out.yaml"

    main(["parse-json", "-i", str(source), "-o", str(target), "--summary"])

    records = yaml.safe_load(target.read_text())
    assert [r["name"] for r in records] == ["A", "C"]
    err = capsys.readouterr().err
    assert "Error processing item 2: Item missing required rawHtml field" in err
    assert "JSON processing complete: 2 successful, 1 errors" in err


def test_stdin_input(stdin_bytes, stdout_buffer):
    """Input is read from stdin when -i is omitted or '-'."""
    stdin_bytes(json.dumps([{"rawHtml": b64(deflate("piped")), "name": "P"}]).encode())
    main(["parse-json", "-i", "-"])
    assert yaml.safe_load(stdout_buffer.getvalue())[0]["rawHtml"] == "piped"


def test_sample_option(tmp_path):
    """--sample processes only N items."""
    items = [{"rawHtml": b64(deflate(str(i))), "name": f"Item {i}"} for i in range(10)]
    source = _write_json(tmp_path / "items.json", items)
    target = tmp_path / "out.yaml"

    main(["parse-json", "-i", str(source), "-o", str(target), "--sample", "3"])

    records = yaml.safe_load(target.read_text())
    assert len(records) == 3
    assert len({r["name"] for r in records}) == 3


@pytest.mark.parametrize("sample", ["0", "-2"])
def test_non_positive_sample_processes_everything(tmp_path, sample):
    """--sample 0 or below disables sampling."""
    items = [{"rawHtml": b64(deflate(str(i))), "name": f"Item {i}"} for i in range(4)]
    source = _write_json(tmp_path / "items.json", items)
    target = tmp_path / "out.yaml"

    main(["parse-json", "-i", str(source), "-o", str(target), "--sample", sample])

    assert [r["name"] for r in yaml.safe_load(target.read_text())] == [f"Item {i}" for i in range(4)]


def test_runner_sampling_larger_than_input(tmp_path):
    """Sampling more than available keeps every item in order."""
    items = [{"rawHtml": b64(deflate(str(i))), "name": f"Item {i}"} for i in range(4)]
    source = _write_json(tmp_path / "items.json", items)
    target = tmp_path / "out.yaml"

    runner = JsonRunner(str(source), str(target), sample=10, rng=random.Random(7))
    stats = asyncio.run(runner.run())

    assert stats.success_count == 4
    assert [r["name"] for r in yaml.safe_load(target.read_text())] == [f"Item {i}" for i in range(4)]
