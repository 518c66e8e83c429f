"""Tests for the command-line interface."""

import json
import socket
from pathlib import Path

import pytest

from logsim.cli import build_contexts, create_parser, main, resolve_settings, sample_events
from logsim.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep LOGSIM_* variables from the developer's shell out of the tests."""
    for var in ("LOGSIM_PORT", "LOGSIM_SEED", "LOGSIM_HOST", "LOGSIM_SERVICE_NAME"):
        monkeypatch.delenv(var, raising=False)


def test_serve_arguments() -> None:
    args = create_parser().parse_args(
        ["serve", "--port", "8080", "--no-scheduler", "--console", "--seed", "3"]
    )
    assert args.command == "serve"
    assert args.port == 8080
    assert args.no_scheduler
    assert args.console
    assert args.seed == 3
    assert args.protocol == "http"


def test_cli_flags_override_settings(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("port: 7000\nservice_name: from-file\n", encoding="utf-8")
    args = create_parser().parse_args(
        ["serve", "--config", str(config), "--port", "9000", "--seed", "4"]
    )
    settings = resolve_settings(args)
    assert settings.port == 9000
    assert settings.seed == 4
    assert settings.service_name == "from-file"


def test_contexts_do_not_share_random_state() -> None:
    scheduler_ctx, http_ctx = build_contexts(Settings(seed=10))
    assert scheduler_ctx.rng is not http_ctx.rng
    again, _ = build_contexts(Settings(seed=10))
    assert scheduler_ctx.rng.random() == again.rng.random()


def test_no_command_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
    assert "logsim" in capsys.readouterr().out


def test_list_prints_catalog(capsys) -> None:
    main(["list"])
    out = capsys.readouterr().out
    assert "api_request [api-request]" in out
    assert "payment_processed [business]" in out


def test_validate_passes(capsys) -> None:
    main(["validate", "--samples", "3", "--seed", "1"])
    assert "Validation passed" in capsys.readouterr().out


def test_sample_events_includes_a_burst() -> None:
    sink = sample_events(1, seed=2)
    assert sink.where(predicate=lambda e: e.get("event") == "error_burst")
    assert sink.where(predicate=lambda e: e.get("burstIndex") == 0)


def test_run_ticks_writes_jsonl(tmp_path: Path) -> None:
    output = tmp_path / "events.jsonl"
    main(["run", "--ticks", "5", "--seed", "7", "--output-file", str(output)])
    lines = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
    assert 5 <= len(lines) <= 20
    for line in lines:
        assert line["level"] in ("info", "warn", "error")
        assert line["type"]
        assert line["timestamp"].endswith("Z")


def test_config_error_exits_1(tmp_path: Path, capsys) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("port: not-a-port\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["run", "--ticks", "1", "--config", str(config)])
    assert exc.value.code == 1
    assert "Configuration error" in capsys.readouterr().err


def test_serve_on_taken_port_exits_1_with_error_event(tmp_path: Path, capsys) -> None:
    output = tmp_path / "events.jsonl"
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as holder:
        holder.bind(("127.0.0.1", 0))
        holder.listen()
        port = holder.getsockname()[1]
        with pytest.raises(SystemExit) as exc:
            main(
                [
                    "serve",
                    "--host",
                    "127.0.0.1",
                    "--port",
                    str(port),
                    "--no-scheduler",
                    "--output-file",
                    str(output),
                ]
            )

    assert exc.value.code == 1
    assert "Error:" in capsys.readouterr().err
    (line,) = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
    assert line["level"] == "error"
    assert line["type"] == "startup"
    assert line["port"] == port
