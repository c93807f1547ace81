from __future__ import annotations

import json

import pytest

from dentdirectory import cli

from conftest import ROOT, FakeDatastore, sample_rows


@pytest.fixture
def config_file(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "\n".join(
            [
                "site:",
                f"  output_dir: {tmp_path / 'public'}",
                f"  template_dir: {ROOT / 'site' / 'templates'}",
                f"  stylesheet: {ROOT / 'site' / 'styles' / 'main.css'}",
                "runtime:",
                f"  log_dir: {tmp_path / 'logs'}",
            ]
        ),
        encoding="utf-8",
    )
    return p


@pytest.fixture
def fake_client(monkeypatch):
    fake = FakeDatastore(sample_rows())
    monkeypatch.setattr(cli, "DatastoreClient", lambda **kwargs: fake)
    return fake


def _events(tmp_path):
    (log_file,) = (tmp_path / "logs").glob("run_*.jsonl")
    return [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]


def test_full_build_exits_zero(config_file, fake_client, tmp_path):
    assert cli.main(["--config", str(config_file)]) == 0
    assert (tmp_path / "public" / "index.html").exists()
    assert (tmp_path / "public" / "stores" / "103" / "index.html").exists()

    summary = [e for e in _events(tmp_path) if e["event"] == "run_summary"][-1]
    assert summary["states"] == 3
    assert summary["cities"] == 3
    assert summary["stores"] == 4
    assert summary["pages"] == 11


def test_output_dir_override(config_file, fake_client, tmp_path):
    out = tmp_path / "elsewhere"
    assert cli.main(["--config", str(config_file), "--output-dir", str(out)]) == 0
    assert (out / "index.html").exists()
    assert not (tmp_path / "public").exists()


def test_single_store_option(config_file, fake_client, tmp_path):
    assert cli.main(["--config", str(config_file), "--store", "100"]) == 0
    assert (tmp_path / "public" / "stores" / "100" / "index.html").exists()
    assert not (tmp_path / "public" / "index.html").exists()


def test_data_failure_exits_nonzero_with_stderr(config_file, monkeypatch, tmp_path, capsys):
    fake = FakeDatastore(sample_rows(), fail_on="states")
    monkeypatch.setattr(cli, "DatastoreClient", lambda **kwargs: fake)
    assert cli.main(["--config", str(config_file)]) == 1
    assert "Build failed: states: permission denied" in capsys.readouterr().err
    failed = [e for e in _events(tmp_path) if e["event"] == "build_failed"]
    assert failed and failed[0]["error_type"] == "DataAccessError"


def test_placeholder_credentials_fail_the_run(config_file, monkeypatch, capsys):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    assert cli.main(["--config", str(config_file)]) == 1
    assert "Build failed" in capsys.readouterr().err


def test_missing_explicit_config_exits_two(tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path / "missing.yaml")]) == 2
    assert "Failed to load config" in capsys.readouterr().err
