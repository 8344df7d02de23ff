import json
import logging
from pathlib import Path

import pandas as pd
import pytest

from select_lib import cli
from select_lib.config import _read_yaml


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    for name in ["BUCKET_NAME", "OBJECT_KEY", "SELECT_EXPRESSION", "SELECT_STRICT", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SELECT_CONFIG", str(tmp_path / "absent.yaml"))
    _read_yaml.cache_clear()
    # main() reconfigures the root logger; put it back afterwards
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def write_input(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "in.jsonl"
    p.write_text(text, encoding="utf-8")
    return p


def test_local_input_prints_records(tmp_path: Path, capsys):
    p = write_input(tmp_path, '{"id": 1,\n"name": "bob"}\n{"id": 2, "name": "ann"}\n')
    rc = cli.main(["--input", str(p), "--chunk-size", "3"])
    out = capsys.readouterr().out
    assert rc == 0
    assert [json.loads(x) for x in out.splitlines()] == [
        {"id": 1, "name": "bob"},
        {"id": 2, "name": "ann"},
    ]


def test_local_input_writes_csv(tmp_path: Path):
    p = write_input(tmp_path, '{"id": 1, "name": "bob", "age": 40}\n')
    csv_path = tmp_path / "records.csv"
    assert cli.main(["--input", str(p), "--csv", str(csv_path)]) == 0
    df = pd.read_csv(csv_path, dtype=str)
    assert df.to_dict("records") == [{"id": "1", "name": "bob", "age": "40"}]


def test_truncated_input_exits_nonzero_after_printing_complete_records(tmp_path: Path, capsys):
    p = write_input(tmp_path, '{"id": 1, "name": "bob"}\n{"id": 2, "na')
    rc = cli.main(["--input", str(p)])
    captured = capsys.readouterr()
    assert rc == 1
    assert json.loads(captured.out) == {"id": 1, "name": "bob"}
    assert "incomplete record" in captured.err


def test_strict_flag_rejects_extra_fields(tmp_path: Path, capsys):
    p = write_input(tmp_path, '{"id": 1, "name": "bob", "age": 40}\n')
    assert cli.main(["--input", str(p), "--strict"]) == 1
    assert "unexpected" in capsys.readouterr().err


def test_missing_s3_target_is_a_config_error(capsys):
    assert cli.main([]) == 2
    assert "BUCKET_NAME" in capsys.readouterr().err


def test_s3_mode_uses_select_source(monkeypatch, capsys):
    seen = {}

    def fake_select(client, bucket, key, expression):
        seen.update(bucket=bucket, key=key, expression=expression)
        yield b'{"id": 7, "name": "bea'
        yield b't"}\n'

    monkeypatch.setattr(cli.boto3, "client", lambda service: object())
    monkeypatch.setattr(cli, "select_object_chunks", fake_select)
    monkeypatch.setenv("BUCKET_NAME", "bkt")
    rc = cli.main(["--key", "people.jsonl", "--expression", "SELECT * FROM s3object"])
    assert rc == 0
    assert seen == {"bucket": "bkt", "key": "people.jsonl", "expression": "SELECT * FROM s3object"}
    assert json.loads(capsys.readouterr().out) == {"id": 7, "name": "beat"}


def test_bad_chunk_size(capsys):
    assert cli.main(["--input", "-", "--chunk-size", "0"]) == 2


def test_malformed_config_exits_with_config_error(tmp_path: Path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("s3: [unclosed\n", encoding="utf-8")
    assert cli.main(["--config", str(cfg)]) == 2
    assert "Invalid YAML" in capsys.readouterr().err


def test_local_input_honours_strict_from_environment(monkeypatch, tmp_path: Path, capsys):
    monkeypatch.setenv("SELECT_STRICT", "1")
    p = write_input(tmp_path, '{"id": 1, "name": "bob", "age": 40}\n')
    assert cli.main(["--input", str(p)]) == 1
    assert "unexpected" in capsys.readouterr().err


def test_unwritable_csv_path_exits_nonzero(tmp_path: Path, capsys):
    p = write_input(tmp_path, '{"id": 1, "name": "bob"}\n')
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    rc = cli.main(["--input", str(p), "--csv", str(blocker / "records.csv")])
    captured = capsys.readouterr()
    assert rc == 1
    assert json.loads(captured.out) == {"id": 1, "name": "bob"}
    assert "error: " in captured.err
