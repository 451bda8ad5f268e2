import json
import logging

import pytest

import settings
from observability.logging_config import JsonFormatter


def test_parse_operators():
    assert settings.parse_operators("alice:secret, bob:a:b ,,") == {"alice": "secret", "bob": "a:b"}
    assert settings.parse_operators("") == {}


@pytest.mark.parametrize("raw", ["alice", ":secret"])
def test_parse_operators_rejects_bad_entries(raw):
    with pytest.raises(ValueError):
        settings.parse_operators(raw)


@pytest.mark.parametrize("raw,expected", [("0", 0), ("8000", 8000), ("65535", 65535)])
def test_bind_port(raw, expected):
    assert settings.bind_port(raw) == expected


@pytest.mark.parametrize("raw", ["-1", "65536", "http", ""])
def test_bind_port_rejects_out_of_range(raw):
    with pytest.raises(ValueError):
        settings.bind_port(raw)


def test_json_formatter_merges_extra_fields():
    record = logging.LogRecord("lifecycle", logging.INFO, __file__, 1, "shutdown_requested", None, None)
    record.group = "lab"
    record.computer = "pc1"

    out = json.loads(JsonFormatter().format(record))

    assert out["msg"] == "shutdown_requested"
    assert out["logger"] == "lifecycle"
    assert out["group"] == "lab"
    assert out["computer"] == "pc1"
    assert "lineno" not in out
