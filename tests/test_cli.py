import json
from pathlib import Path

from hookwork import cli


def _write_plan(tmp_path: Path) -> Path:
    plan_path = tmp_path / "plan.yaml"
    plan_path.write_text(
        """
name: emit
args: [asset]
taps:
  - name: write
  - name: hash
    kind: callback
    stage: -1
  - name: compress
    kind: deferred
    before: write
"""
    )
    return plan_path


def test_cli_parser_supports_commands() -> None:
    parser = cli.build_parser()

    parsed = parser.parse_args(["order", "--format", "json"])
    assert parsed.command == "order"
    assert parsed.format == "json"

    parsed_run = parser.parse_args(["run", "1", "2", "3"])
    assert parsed_run.values == ["1", "2", "3"]


def test_order_uses_demo_plan_by_default(tmp_path: Path, capsys) -> None:
    exit_code = cli.main(["--config-dir", str(tmp_path), "order"])

    assert exit_code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["1. B stage=-1 kind=sync", "2. A stage=0 kind=sync"]


def test_order_json_for_plan_file(tmp_path: Path, capsys) -> None:
    plan_path = _write_plan(tmp_path)

    exit_code = cli.main(["--config-dir", str(tmp_path), "order", "--plan", str(plan_path), "--format", "json"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [entry["name"] for entry in payload] == ["hash", "compress", "write"]
    assert payload[1] == {"name": "compress", "kind": "deferred", "stage": 0, "before": ["write"]}


def test_run_invokes_taps_in_order(tmp_path: Path, capsys) -> None:
    plan_path = _write_plan(tmp_path)

    exit_code = cli.main(["--config-dir", str(tmp_path), "run", "--plan", str(plan_path), "main.js"])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["hash main.js", "compress main.js", "write main.js"]


def test_run_demo_plan(tmp_path: Path, capsys) -> None:
    exit_code = cli.main(["--config-dir", str(tmp_path), "run", "1", "2", "3"])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["B 1 2 3", "A 1 2 3"]


def test_run_rejects_wrong_argument_count(tmp_path: Path) -> None:
    assert cli.main(["--config-dir", str(tmp_path), "run", "only-one"]) == 2


def test_invalid_plan_returns_error(tmp_path: Path) -> None:
    plan_path = tmp_path / "plan.yaml"
    plan_path.write_text("taps:\n  - name: ''\n")

    assert cli.main(["--config-dir", str(tmp_path), "order", "--plan", str(plan_path)]) == 1


def test_invalid_config_returns_error(tmp_path: Path) -> None:
    (tmp_path / ".hookwork.yaml").write_text("metrics: 1\n")

    assert cli.main(["--config-dir", str(tmp_path), "order"]) == 1


def test_malformed_config_yaml_returns_error(tmp_path: Path) -> None:
    (tmp_path / ".hookwork.yaml").write_text("logging: [unclosed\n")

    assert cli.main(["--config-dir", str(tmp_path), "order"]) == 1
