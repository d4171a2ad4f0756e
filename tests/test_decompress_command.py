"""Tests for the default decompress command."""
import pytest
from src.main import main, parse_args, with_default_command

from helpers import deflate, deflate_raw, gzip_bytes


def test_default_command_inserted():
    """Test that flags alone select the decompress command."""
    assert with_default_command([]) == ["decompress"]
    assert with_default_command(["-f", "raw"]) == ["decompress", "-f", "raw"]
    assert with_default_command(["batch", "-i", "x"]) == ["batch", "-i", "x"]
    assert parse_args(["-s"]).command == "decompress"


def test_defaults():
    """Test default flag values."""
    args = parse_args([])
    assert args.format == "auto"
    assert args.input is None
    assert args.output is None
    assert args.string is False


def test_invalid_format_rejected():
    """Test argparse rejects unknown formats."""
    with pytest.raises(SystemExit):
        parse_args(["-f", "zip"])


def test_file_to_file(tmp_path):
    """Test decompressing a file into another file."""
    source = tmp_path / "in.gz"
    source.write_bytes(gzip_bytes("payload"))
    target = tmp_path / "out.txt"

    main(["-i", str(source), "-o", str(target)])

    assert target.read_bytes() == b"payload"


def test_stdin_to_stdout(stdin_bytes, stdout_buffer):
    """Test the stdin/stdout defaults."""
    stdin_bytes(deflate_raw("from stdin"))
    main(["decompress", "-f", "raw", "-s"])
    assert stdout_buffer.getvalue() == b"from stdin"


def test_empty_input_exits_1(tmp_path, capsys):
    """Empty input is fatal."""
    source = tmp_path / "empty.bin"
    source.write_bytes(b"")
    with pytest.raises(SystemExit) as exc_info:
        main(["-i", str(source)])
    assert exc_info.value.code == 1
    assert "Fatal error: No input data received" in capsys.readouterr().err


def test_wrong_format_exits_1(tmp_path, capsys):
    """An explicit format that does not match is fatal."""
    source = tmp_path / "in.bin"
    source.write_bytes(deflate("x"))
    with pytest.raises(SystemExit) as exc_info:
        main(["-i", str(source), "-f", "gzip"])
    assert exc_info.value.code == 1
    assert "Fatal error" in capsys.readouterr().err


def test_missing_input_file_exits_1(tmp_path):
    """Test an unreadable input file."""
    with pytest.raises(SystemExit) as exc_info:
        main(["-i", str(tmp_path / "missing.bin")])
    assert exc_info.value.code == 1


def test_verbose_logs_to_stderr(tmp_path, capsys):
    """Verbose output goes to stderr, never into the data stream."""
    source = tmp_path / "in.bin"
    source.write_bytes(deflate("quiet data"))
    target = tmp_path / "out.txt"

    main(["-i", str(source), "-o", str(target), "-v"])

    err = capsys.readouterr().err
    assert "Successfully decompressed with deflate format" in err
    assert target.read_bytes() == b"quiet data"
