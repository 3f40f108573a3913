# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/cli/app.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from foreman_host.api.client import ForemanClient
from foreman_host.api.codec import redact
from foreman_host.api.errors import ForemanError
from foreman_host.api.host import HostManager
from foreman_host.api.models import BootDevice, Host, PowerAction
from foreman_host.config.host_spec import load_host_spec
from foreman_host.config.loader import load_config
from foreman_host.config.models import ForemanConfig
from foreman_host.logging.log import init_logging
from foreman_host.utils.serialize import to_jsonable


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Foreman host lifecycle and BMC CLI")


class _State:
    def __init__(self, config_path: Path, verbose: bool, log_dir: Optional[Path]):
        self.config_path = config_path
        self.verbose = verbose
        self.log_dir = log_dir
        self._cfg: Optional[ForemanConfig] = None

    @property
    def cfg(self) -> ForemanConfig:
        if self._cfg is None:
            self._cfg = load_config(self.config_path)
        return self._cfg


def build_manager(cfg: ForemanConfig) -> HostManager:
    return HostManager(ForemanClient(cfg), retry_delay=cfg.retry_delay_seconds)


def _echo_json(obj: Any) -> None:
    typer.echo(json.dumps(redact(to_jsonable(obj)), indent=2))


def _run(ctx: typer.Context, action):
    """
    Load config, build the manager and run *action* with it. Foreman and
    config failures become a one-line error and exit code 1.
    """
    state: _State = ctx.obj
    logger, _, _ = init_logging(base_dir=state.log_dir, verbose=state.verbose)
    try:
        manager = build_manager(state.cfg)
        return action(manager, state.cfg)
    except (ForemanError, ValidationError, OSError, ValueError) as exc:
        logger.debug("command failed", exc_info=True)
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(Path("foreman.yaml"), "--config", "-c", help="Foreman connection YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Defaults to ~/.foreman_host/logs"),
):
    ctx.obj = _State(config, verbose, log_dir)


# ------------------------------------------------------------------------------
# Host lifecycle
# ------------------------------------------------------------------------------

@app.command()
def create(
    ctx: typer.Context,
    host_file: Path = typer.Argument(..., help="Host definition YAML"),
):
    """Create a host."""
    def action(manager: HostManager, cfg: ForemanConfig):
        host = load_host_spec(host_file)
        return manager.create_host(host, cfg.retry_count)

    _echo_json(_run(ctx, action))


@app.command()
def show(ctx: typer.Context, host_id: int = typer.Argument(...)):
    """Read a host by id."""
    _echo_json(_run(ctx, lambda manager, cfg: manager.read_host(host_id)))


@app.command()
def update(
    ctx: typer.Context,
    host_file: Path = typer.Argument(..., help="Host definition YAML, must carry the host id"),
):
    """Update an existing host."""
    def action(manager: HostManager, cfg: ForemanConfig):
        host = load_host_spec(host_file)
        if not host.id:
            raise ValueError(f"{host_file}: 'id' is required for update")
        return manager.update_host(host, cfg.retry_count)

    _echo_json(_run(ctx, action))


@app.command()
def delete(ctx: typer.Context, host_id: int = typer.Argument(...)):
    """Delete a host by id."""
    _run(ctx, lambda manager, cfg: manager.delete_host(host_id))
    typer.echo(f"Deleted host {host_id}")


# ------------------------------------------------------------------------------
# BMC
# ------------------------------------------------------------------------------

@app.command()
def power(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Host name"),
    action: PowerAction = typer.Argument(...),
):
    """Run a BMC power action (on, off, soft, cycle, state)."""
    host = Host(name=name)
    _echo_json(_run(ctx, lambda manager, cfg: manager.power(host, action.value, cfg.retry_count)))


@app.command()
def boot(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Host name"),
    device: BootDevice = typer.Argument(...),
):
    """Select the next boot device (disk, cdrom, pxe, bios)."""
    host = Host(name=name)
    _echo_json(_run(ctx, lambda manager, cfg: manager.boot(host, device.value, cfg.retry_count)))


if __name__ == "__main__":
    app()
