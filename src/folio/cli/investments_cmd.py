"""folio list / add / edit / delete / summary."""

from __future__ import annotations

from datetime import date

import click

from folio.investments.models import InvestmentFormData, InvestmentType
from folio.investments.store import InvestmentStore
from folio.investments.summary import chart_series, format_currency, format_date, type_share

from .common import parse_form, run_with_store

TYPE_CHOICES = [t.value for t in InvestmentType]
BAR_WIDTH = 30


def _print_table(store: InvestmentStore) -> None:
    investments = store.investments
    if not investments:
        click.echo("No investments recorded yet.")
        return
    for inv in investments:
        amount = format_currency(inv.amount)
        click.echo(f"{inv.id:<10} {inv.name:<32} {inv.type.label:<7} {amount:>16}  {format_date(inv.date)}")


@click.command("list")
@click.pass_obj
def list_investments(config) -> None:
    """List every recorded investment."""

    async def _action(store: InvestmentStore) -> None:
        _print_table(store)

    run_with_store(config, _action)


@click.command()
@click.argument("name")
@click.option("--type", "type_", type=click.Choice(TYPE_CHOICES, case_sensitive=False), required=True)
@click.option("--amount", required=True, help="Invested amount, e.g. 1000.50")
@click.option("--date", "date_", default=None, help="YYYY-MM-DD, defaults to today.")
@click.pass_obj
def add(config, name: str, type_: str, amount: str, date_: str | None) -> None:
    """Record a new investment."""
    form = parse_form(name=name, type=type_, amount=amount, date=date_ or date.today().isoformat())

    async def _action(store: InvestmentStore) -> None:
        investment = await store.create(form)
        if investment:
            click.echo(f"id: {investment.id}")

    run_with_store(config, _action)


@click.command()
@click.argument("investment_id")
@click.option("--name", default=None)
@click.option("--type", "type_", type=click.Choice(TYPE_CHOICES, case_sensitive=False), default=None)
@click.option("--amount", default=None)
@click.option("--date", "date_", default=None, help="YYYY-MM-DD")
@click.pass_obj
def edit(
    config,
    investment_id: str,
    name: str | None,
    type_: str | None,
    amount: str | None,
    date_: str | None,
) -> None:
    """Edit an investment. Fields not given keep their current value."""

    async def _action(store: InvestmentStore) -> None:
        current = store.get(investment_id)
        if current is None:
            raise click.ClickException(f"Investment {investment_id} not found")
        form = InvestmentFormData.parse(
            name=current.name if name is None else name,
            type=type_ or current.type,
            amount=current.amount if amount is None else amount,
            date=date_ or current.date,
        )
        await store.update(investment_id, form)

    run_with_store(config, _action)


@click.command()
@click.argument("investment_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete(config, investment_id: str, yes: bool) -> None:
    """Delete an investment."""
    if not yes:
        click.confirm(f"Delete investment {investment_id}?", abort=True)

    async def _action(store: InvestmentStore) -> None:
        await store.delete(investment_id)

    run_with_store(config, _action)


@click.command()
@click.option("--localized", is_flag=True, help="Use localized type labels.")
@click.pass_obj
def summary(config, localized: bool) -> None:
    """Show totals and the distribution by type."""

    async def _action(store: InvestmentStore) -> None:
        result = store.summary()
        click.echo(f"Total invested: {format_currency(result.total_amount)}")
        click.echo(f"Investments:    {result.total_investments}")

        labels, values = chart_series(result, localized=localized)
        if not labels:
            click.echo("Nothing to chart yet.")
            return

        click.echo("")
        peak = max(values)
        for label, value, investment_type in zip(labels, values, result.distribution_by_type):
            bar = "#" * max(1, int(value / peak * BAR_WIDTH)) if peak else ""
            share = type_share(result, investment_type)
            click.echo(f"{label:<7} {bar:<{BAR_WIDTH}} {share:>5}%  {format_currency(value)}")

    run_with_store(config, _action)
