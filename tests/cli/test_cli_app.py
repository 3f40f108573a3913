import json
from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

import foreman_host.cli.app as cli
from foreman_host.api.errors import BMCOperationError, TransportError
from foreman_host.api.models import BMCBoot, BMCBootResult, BMCPower, Host

runner = CliRunner()


class FakeManager:
    def __init__(self, fail=None):
        self.calls = []
        self.fail = fail

    def _record(self, *call):
        self.calls.append(call)
        if self.fail:
            raise self.fail

    def create_host(self, host, retry_count):
        self._record("create", host, retry_count)
        return Host(id=42, name=host.name, domain_id=3)

    def read_host(self, host_id):
        self._record("read", host_id)
        return Host(id=host_id, name="node1")

    def update_host(self, host, retry_count):
        self._record("update", host, retry_count)
        return host

    def delete_host(self, host_id):
        self._record("delete", host_id)

    def power(self, host, action, retry_count):
        self._record("power", host.name, action, retry_count)
        return BMCPower(power=True)

    def boot(self, host, device, retry_count):
        self._record("boot", host.name, device, retry_count)
        return BMCBoot(boot=BMCBootResult(action=device, result=True))


@pytest.fixture
def env(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("FOREMAN_HOST_SECRETS_FILE", raising=False)
    cfg = tmp_path / "foreman.yaml"
    cfg.write_text(textwrap.dedent("""
        server_url: https://foreman.example.com
        username: admin
        password: changeme
        retry_count: 4
    """))
    manager = FakeManager()
    monkeypatch.setattr(cli, "build_manager", lambda c: manager)
    base = ["--config", str(cfg), "--log-dir", str(tmp_path / "logs")]
    return base, manager, tmp_path


def test_create_prints_created_host(env):
    base, manager, tmp_path = env
    host_file = tmp_path / "node1.yaml"
    host_file.write_text("name: node1\ndomain_id: 3\n")

    result = runner.invoke(cli.app, base + ["create", str(host_file)])

    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["id"] == 42
    assert out["domain_id"] == 3

    op, host, retry_count = manager.calls[0]
    assert op == "create"
    assert host.name == "node1"
    assert retry_count == 4


def test_show_and_delete(env):
    base, manager, _ = env

    result = runner.invoke(cli.app, base + ["show", "7"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["id"] == 7

    result = runner.invoke(cli.app, base + ["delete", "7"])
    assert result.exit_code == 0, result.output
    assert "Deleted host 7" in result.stdout
    assert manager.calls == [("read", 7), ("delete", 7)]


def test_update_requires_id(env):
    base, manager, tmp_path = env
    host_file = tmp_path / "node1.yaml"
    host_file.write_text("name: node1\n")

    result = runner.invoke(cli.app, base + ["update", str(host_file)])

    assert result.exit_code == 1
    assert manager.calls == []


def test_power_and_boot(env):
    base, manager, _ = env

    result = runner.invoke(cli.app, base + ["power", "node1", "cycle"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["power"] is True

    result = runner.invoke(cli.app, base + ["boot", "node1", "pxe"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["boot"]["result"] is True

    assert manager.calls == [("power", "node1", "cycle", 4), ("boot", "node1", "pxe", 4)]


def test_invalid_power_action_is_rejected(env):
    base, manager, _ = env

    result = runner.invoke(cli.app, base + ["power", "node1", "explode"])

    assert result.exit_code != 0
    assert manager.calls == []


@pytest.mark.parametrize("error", [TransportError("down"), BMCOperationError("Failed BMC power operation")])
def test_foreman_errors_exit_1(env, error):
    base, manager, _ = env
    manager.fail = error

    result = runner.invoke(cli.app, base + ["power", "node1", "on"])

    assert result.exit_code == 1


def test_missing_config_exits_1(tmp_path: Path):
    result = runner.invoke(
        cli.app,
        ["--config", str(tmp_path / "nope.yaml"), "--log-dir", str(tmp_path), "show", "1"],
    )
    assert result.exit_code == 1
