from __future__ import annotations

import json
from pathlib import Path

import pytest

from webforms import cli


@pytest.fixture(autouse=True)
def _run_in_tmp_path(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_main_without_command_prints_help(capsys) -> None:
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_check_accepts_sample(sample_schema_path: Path) -> None:
    assert cli.main(["check", "--schema", str(sample_schema_path)]) == 0


def test_check_rejects_schema_without_components(tmp_path: Path) -> None:
    schema_path = _write_json(tmp_path / "empty.json", {"form_id": "empty"})

    assert cli.main(["check", "--schema", str(schema_path)]) == 1


def test_check_rejects_malformed_document(tmp_path: Path) -> None:
    schema_path = tmp_path / "broken.json"
    schema_path.write_text("{", encoding="utf-8")

    assert cli.main(["check", "--schema", str(schema_path)]) == 1


def test_check_reports_missing_file(tmp_path: Path) -> None:
    assert cli.main(["check", "--schema", str(tmp_path / "missing.json")]) == 1


def test_validate_valid_submission(capsys, sample_schema_path: Path, tmp_path: Path) -> None:
    data_path = _write_json(tmp_path / "data.json", {"eMailAddress": "info@kinetix.com", "role": "director"})

    assert cli.main(["validate", "--schema", str(sample_schema_path), "--data", str(data_path)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result == {"valid": True, "errors": {}}


def test_validate_invalid_submission(capsys, sample_schema_path: Path, tmp_path: Path) -> None:
    data_path = _write_json(tmp_path / "data.json", {"role": "invalidRole"})

    assert cli.main(["validate", "--schema", str(sample_schema_path), "--data", str(data_path)]) == 1

    result = json.loads(capsys.readouterr().out)
    assert result == {"valid": False, "errors": {"role": "Value is not one of the allowed options"}}


def test_validate_rejects_non_object_data(sample_schema_path: Path, tmp_path: Path) -> None:
    data_path = _write_json(tmp_path / "data.json", ["not", "an", "object"])

    assert cli.main(["validate", "--schema", str(sample_schema_path), "--data", str(data_path)]) == 1


def test_roundtrip_to_stdout(capsys, sample_schema_path: Path, sample_document: dict) -> None:
    assert cli.main(["roundtrip", "--schema", str(sample_schema_path)]) == 0

    assert json.loads(capsys.readouterr().out) == sample_document


def test_roundtrip_to_file(sample_schema_path: Path, sample_document: dict, tmp_path: Path) -> None:
    output_path = tmp_path / "out" / "schema.json"

    assert cli.main(["roundtrip", "--schema", str(sample_schema_path), "--output", str(output_path)]) == 0

    assert json.loads(output_path.read_text(encoding="utf-8")) == sample_document
