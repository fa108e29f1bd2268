"""Basic sanity tests for the CLI."""

import logging

import yaml
from typer.testing import CliRunner

from conftest import RecordingDirectoryClient

from object_store_discovery import cli
from object_store_discovery.cli import app
from object_store_discovery.codec import AnnouncementCodec
from object_store_discovery.directory import InMemoryDirectoryClient
from object_store_discovery.discovery_module import create_injector

runner = CliRunner()


def _config_file(tmp_path):
    path = tmp_path / "discovery.yaml"
    path.write_text(yaml.safe_dump({
        "discovery": {
            "s3-bucket-name": "cluster-discovery",
            "s3-bucket-region": "us-east-1",
            "file-prefix": "nodes/",
            "file-expiration": 0,
        }
    }))
    return path


def test_help_command():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Object-store peer discovery CLI" in result.stdout


def test_version_command():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "object-store-discovery" in result.stdout


def test_resolve_command_prints_peers(tmp_path, monkeypatch):
    directory = InMemoryDirectoryClient()
    directory.put("cluster-discovery", "nodes/b", AnnouncementCodec.encode("b", "10.0.0.2", 7800, 0))
    directory.put("cluster-discovery", "nodes/a", AnnouncementCodec.encode("a", "10.0.0.1", 7800, 0))
    directory.put("cluster-discovery", "nodes/junk", b"junk")
    monkeypatch.setattr(cli, "create_injector", lambda config: create_injector(config, directory_client=directory))

    result = runner.invoke(app, ["resolve", "--config", str(_config_file(tmp_path))])

    assert result.exit_code == 0, result.output
    assert result.stdout.split() == ["10.0.0.1:7800", "10.0.0.2:7800"]


def test_resolve_command_requires_existing_config(tmp_path):
    result = runner.invoke(app, ["resolve", "--config", str(tmp_path / "absent.yaml")])
    assert result.exit_code != 0


def test_run_command_announces_and_leaves_on_interrupt(tmp_path, monkeypatch, caplog):
    directory = RecordingDirectoryClient()
    monkeypatch.setattr(cli, "create_injector", lambda config: create_injector(config, directory_client=directory))

    def interrupt(seconds):
        raise KeyboardInterrupt()

    monkeypatch.setattr(cli.time, "sleep", interrupt)
    caplog.set_level(logging.INFO)

    result = runner.invoke(app, [
        "run",
        "--config", str(_config_file(tmp_path)),
        "--cluster-id", "node-7",
        "--host", "10.0.0.7",
        "--port", "7800",
    ])

    assert result.exit_code == 0, result.output
    assert directory.events == [("put", "nodes/node-7"), ("delete", "nodes/node-7")]
    assert directory.keys("cluster-discovery") == []
    assert any("Resolved 1 peer(s): 10.0.0.7:7800" in r.getMessage() for r in caplog.records)
