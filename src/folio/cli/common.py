"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click

from folio.core.config import Config
from folio.core.events import NOTIFICATION, Event
from folio.core.exceptions import ConfigurationError, FormValidationError
from folio.core.notifications import Notifier
from folio.core.utils.logging import setup_logging_from_config
from folio.investments.models import InvestmentFormData
from folio.investments.repository import create_repository
from folio.investments.store import InvestmentStore

FOLIO_DIR = Path.home() / ".folio"
CONFIG_PATH = FOLIO_DIR / "config.yaml"


def load_config(config_file: str | None = None) -> Config:
    """Load config from *config_file*, else ~/.folio/config.yaml if present."""
    path = config_file or str(CONFIG_PATH)
    try:
        return Config(config_file=path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def _echo_notification(event: Event) -> None:
    payload = event.payload
    text = payload["title"]
    if payload.get("description"):
        text = f"{text} {payload['description']}"
    if payload.get("ok", True):
        click.secho(text, fg="red" if payload.get("variant") == "destructive" else "green")
    else:
        click.secho(text, fg="red", err=True)


def build_store(config: Config) -> InvestmentStore:
    """Wire logging, repository, and notifier into a ready-to-load store."""
    setup_logging_from_config(config)
    try:
        config.validated()
        repository = create_repository(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    notifier = Notifier()
    notifier.bus.on(NOTIFICATION, _echo_notification)
    return InvestmentStore(repository, notifier)


def _echo_form_errors(error: FormValidationError) -> None:
    for field, message in error.errors.items():
        click.secho(f"{field}: {message}", fg="red", err=True)


def parse_form(**raw: Any) -> InvestmentFormData:
    """Parse raw option values, exiting 1 with per-field messages on bad input."""
    try:
        return InvestmentFormData.parse(**raw)
    except FormValidationError as e:
        _echo_form_errors(e)
        sys.exit(1)


def run_with_store(config: Config, action: Callable[[InvestmentStore], Awaitable[Any]]) -> Any:
    """Load a store, run *action* against it, and exit 1 if anything failed."""
    store = build_store(config)

    async def _run() -> Any:
        await store.load()
        return await action(store)

    try:
        result = asyncio.run(_run())
    except FormValidationError as e:
        _echo_form_errors(e)
        sys.exit(1)

    if any(not n.ok for n in store.notifier.recent()):
        sys.exit(1)
    return result
