from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from property_counter.app.cli import apply_logging_overrides, apply_output_override, parse_args, run
from property_counter.config.loader import ConfigError, load_config
from property_counter.main import main
from property_counter.usecases.config_models import AppConfig


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _baseline_config() -> Path:
    return _repo_root() / "src" / "property_counter" / "baseline_config.yml"


def _minimal_config() -> AppConfig:
    return AppConfig.model_validate(
        {
            "version": 1,
            "datasets": {"numbers": {"values": [1, 2, 3]}},
            "queries": [{"name": "odd", "dataset": "numbers", "checkers": [{"kind": "odd"}]}],
        }
    )


def test_parse_args_reads_flags() -> None:
    args = parse_args(["--config", "cfg.yml", "--output", "out.jsonl", "--log-sink", "jsonl", "--log-path", "l.jsonl"])
    assert args.config == "cfg.yml"
    assert args.output == "out.jsonl"
    assert args.log_sink == "jsonl"
    assert args.log_path == "l.jsonl"


def test_apply_output_override_updates_config() -> None:
    config = _minimal_config()
    apply_output_override(config, SimpleNamespace(output="override.jsonl"))
    assert config.output.file_path == "override.jsonl"


def test_apply_logging_overrides() -> None:
    # A log path alone switches to the JSONL sink; an explicit sink wins.
    config = _minimal_config()
    apply_logging_overrides(config, SimpleNamespace(log_sink=None, log_path=None))
    assert config.logging.sink == "stdout"

    apply_logging_overrides(config, SimpleNamespace(log_sink=None, log_path="run.jsonl"))
    assert (config.logging.sink, config.logging.path) == ("jsonl", "run.jsonl")

    apply_logging_overrides(config, SimpleNamespace(log_sink="none", log_path=None))
    assert config.logging.sink == "none"


def test_cli_run_writes_baseline_report(tmp_path: Path) -> None:
    output_path = tmp_path / "report.jsonl"
    exit_code = run(["--config", str(_baseline_config()), "--output", str(output_path), "--log-sink", "memory"])
    assert exit_code == 0

    lines = [json.loads(line) for line in output_path.read_text(encoding="utf-8").splitlines()]
    config = load_config(_baseline_config())
    assert len(lines) == len(config.queries)

    results = {line["query"]: line["result"] for line in lines}
    assert results["odd_numbers"] == 50
    assert results["even_numbers"] == 50
    assert results["prime_numbers"] == 25
    assert results["palindrome_words"] == 8
    assert results["perfect_numbers"]["matches"] == [6, 28, 496]
    assert results["odd_and_prime"] == 167
    assert results["prime_analysis"]["matching_elements"] == [11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]
    assert results["valid_emails"] == 3
    assert results["contains_java"] == 1
    assert results["empty_collections"] == 1
    assert results["non_empty_by_size"] == 5


def test_cli_run_logs_failures_to_jsonl(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.yml"
    config_path.write_text(
        "\n".join(
            [
                "version: 1",
                "datasets:",
                "  mixed:",
                "    values: [1, two, 3]",
                "queries:",
                "  - name: odd",
                "    dataset: mixed",
                "    checkers: [{kind: odd}]",
            ]
        ),
        encoding="utf-8",
    )
    output_path = tmp_path / "out.jsonl"
    log_path = tmp_path / "log.jsonl"
    assert main(["--config", str(config_path), "--output", str(output_path), "--log-path", str(log_path)]) == 0
    assert json.loads(output_path.read_text(encoding="utf-8"))["result"] == 2
    record = json.loads(log_path.read_text(encoding="utf-8").splitlines()[0])
    assert record["level"] == "warning"
    assert record["fields"]["element"] == "'two'"


def test_cli_run_prints_to_stdout(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.yml"
    config_path.write_text(
        "version: 1\ndatasets: {n: {values: [2, 4]}}\nqueries: [{name: even, dataset: n, checkers: [{kind: even}]}]\n",
        encoding="utf-8",
    )
    assert run(["--config", str(config_path), "--log-sink", "none"]) == 0
    assert json.loads(capsys.readouterr().out.strip())["result"] == 2


def test_cli_run_propagates_config_errors(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.yml"
    config_path.write_text("version: 1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        run(["--config", str(config_path)])
