import json

import pytest

from namelint import cli

EXAMPLE = [
    {"name": "temp", "kind": "variable", "location": "app.py:1"},
    {"name": "created_at", "kind": "variable", "location": "app.py:2"},
    {"name": "user_id", "kind": "variable", "location": "app.py:3"},
]


@pytest.fixture
def identifiers_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "identifiers.json"
    path.write_text(json.dumps(EXAMPLE), encoding="utf-8")
    return path


def test_cli_generates_json_report(identifiers_file, tmp_path, capsys):
    output_path = tmp_path / "out" / "report.json"

    exit_code = cli.main(["--input", str(identifiers_file), "--format", "json", "--out", str(output_path)])

    captured = capsys.readouterr()
    assert "Naming Summary" in captured.out
    assert exit_code == 0
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["summary"]["findings"] == 1
    assert data["summary"]["identifiers"] == 3
    assert data["clean"] is False
    assert data["groups"][0]["identifiers"][0]["findings"][0]["rule_id"] == "NL101"


def test_cli_prints_text_report(identifiers_file, capsys):
    exit_code = cli.main(["--input", str(identifiers_file)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "NL101 banned-abbreviation" in captured.out
    assert "created_at" not in captured.out


def test_cli_yaml_output_accepts_identifier_mapping(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "identifiers.yaml"
    path.write_text("identifiers:\n  - {name: created, kind: timestamp}\n", encoding="utf-8")

    exit_code = cli.main(["-i", str(path), "--format", "yaml"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "rule_id: NL110" in captured.out


def test_cli_fail_on_findings(identifiers_file, capsys):
    assert cli.main(["--input", str(identifiers_file), "--fail-on-findings"]) == 1
    assert cli.main(["--input", str(identifiers_file), "--fail-on-findings", "--disable", "NL101"]) == 0


def test_cli_scans_python_sources(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    source = tmp_path / "src"
    source.mkdir()
    (source / "jobs.py").write_text("def obtain_jobs():\n    retry_interval = 5\n", encoding="utf-8")

    exit_code = cli.main(["--source", str(source), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    rule_ids = [
        finding["rule_id"]
        for group in data["groups"]
        for entry in group["identifiers"]
        for finding in entry["findings"]
    ]
    assert rule_ids == ["NL103", "NL120"]


def test_cli_honours_config_allow_list(identifiers_file, tmp_path, capsys):
    (tmp_path / ".namelint.yaml").write_text("allow: [temp]\nformat: json\n", encoding="utf-8")

    exit_code = cli.main(["--input", str(identifiers_file), "--fail-on-findings"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["clean"] is True


def test_cli_records_invalid_identifiers(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "identifiers.json"
    path.write_text(json.dumps([{"name": "", "kind": "variable"}, {"name": "usr", "kind": "column"}]), encoding="utf-8")

    exit_code = cli.main(["--input", str(path), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["summary"]["invalid"] == 1
    assert data["errors"][0]["position"] == 0


def test_cli_bad_catalog_exits_with_configuration_error(identifiers_file, tmp_path, capsys):
    catalog = tmp_path / "rules.yaml"
    catalog.write_text("rules:\n  - id: NL001\n    name: broken\n", encoding="utf-8")

    exit_code = cli.main(["--input", str(identifiers_file), "--catalog", str(catalog)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert "configuration error" in captured.err


def test_cli_list_rules(capsys):
    assert cli.main(["--list-rules"]) == 0

    captured = capsys.readouterr()
    assert "NL101" in captured.out
    assert "conventional-commit" in captured.out


def test_cli_requires_something_to_check(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2


def test_cli_missing_input_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--input", str(tmp_path / "absent.json")])
    assert excinfo.value.code == 2
