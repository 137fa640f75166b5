"""
CLI interface for the invoicing DAO.

Exposes each data-access operation as a command.
"""

import sys
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from invoicing_dao.config.loader import Settings, load_settings
from invoicing_dao.demo.seed_demo_data import seed_demo_data
from invoicing_dao.storage.models import Customer
from invoicing_dao.storage.repository import get_dao, initialize_schema
from invoicing_dao.utils.logging_config import setup_logging

app = typer.Typer()
console = Console()

EXIT_CODE_OK = 0
EXIT_CODE_FAIL = 1
EXIT_CODE_NOT_FOUND = 2


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML settings file"
    ),
    db: Optional[str] = typer.Option(
        None,
        "--db",
        help="SQLite database file (overrides the configured path)"
    )
):
    """Invoicing DAO CLI."""
    try:
        settings = load_settings(config) if config else Settings()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading config:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    setup_logging(settings.logging.level)
    ctx.obj = {"db_path": db or settings.database.path}

    if ctx.invoked_subcommand is None:
        console.print("Invoicing DAO - Use --help to see available commands")


def _db_path(ctx: typer.Context) -> str:
    return ctx.obj["db_path"]


def _fail(e: Exception) -> None:
    console.print(f"[red]Error:[/] {str(e)}")
    sys.exit(EXIT_CODE_FAIL)


def _format_currency(amount: float) -> str:
    """Format an amount with two decimals and thousands separators."""
    return f"${amount:,.2f}"


def _customer_table(title: str, customers: List[Customer]) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("First name")
    table.add_column("Last name")
    table.add_column("Street")
    table.add_column("City")
    for customer in customers:
        table.add_row(
            str(customer.customer_id),
            customer.first_name or "",
            customer.last_name or "",
            customer.street or "",
            customer.city or ""
        )
    return table


@app.command()
def init(ctx: typer.Context):
    """Create the invoicing tables."""
    try:
        initialize_schema(_db_path(ctx))
        console.print("[green]✓[/] Database initialized successfully")
    except Exception as e:
        console.print(f"[red]Error initializing database:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)


@app.command()
def seed(ctx: typer.Context):
    """Create the tables and load demo customers and products."""
    try:
        seed_demo_data(_db_path(ctx))
        console.print("[green]✓[/] Demo data loaded")
    except Exception as e:
        _fail(e)


@app.command()
def total(ctx: typer.Context, customer_id: int = typer.Argument(..., help="Customer ID")):
    """Show the revenue of a customer."""
    try:
        amount = get_dao(_db_path(ctx)).total_for_customer(customer_id)
    except Exception as e:
        _fail(e)
    console.print(f"Total for customer {customer_id}: {_format_currency(amount)}")


@app.command()
def name(ctx: typer.Context, customer_id: int = typer.Argument(..., help="Customer ID")):
    """Show the last name of a customer."""
    try:
        last_name = get_dao(_db_path(ctx)).name_of_customer(customer_id)
    except Exception as e:
        _fail(e)
    if last_name is None:
        console.print(f"[yellow]No customer with ID {customer_id}[/]")
        sys.exit(EXIT_CODE_NOT_FOUND)
    console.print(last_name)


@app.command()
def customers(ctx: typer.Context):
    """Show the number of customers."""
    try:
        count = get_dao(_db_path(ctx)).number_of_customers()
    except Exception as e:
        _fail(e)
    console.print(f"Customers: {count}")


@app.command()
def invoices(ctx: typer.Context, customer_id: int = typer.Argument(..., help="Customer ID")):
    """Show the number of invoices issued to a customer."""
    try:
        count = get_dao(_db_path(ctx)).number_of_invoices_for_customer(customer_id)
    except Exception as e:
        _fail(e)
    console.print(f"Invoices for customer {customer_id}: {count}")


@app.command()
def find(ctx: typer.Context, customer_id: int = typer.Argument(..., help="Customer ID")):
    """Show a customer record."""
    try:
        customer = get_dao(_db_path(ctx)).find_customer(customer_id)
    except Exception as e:
        _fail(e)
    if customer is None:
        console.print(f"[yellow]No customer with ID {customer_id}[/]")
        sys.exit(EXIT_CODE_NOT_FOUND)
    console.print(_customer_table(f"Customer {customer_id}", [customer]))


@app.command()
def city(ctx: typer.Context, city_name: str = typer.Argument(..., metavar="CITY", help="City (exact match)")):
    """List the customers located in a city."""
    try:
        found = get_dao(_db_path(ctx)).customers_in_city(city_name)
    except Exception as e:
        _fail(e)
    if not found:
        console.print(f"[dim]No customers in {city_name}[/]")
        return
    console.print(_customer_table(f"Customers in {city_name}", found))


@app.command("create-invoice")
def create_invoice(
    ctx: typer.Context,
    customer_id: int = typer.Argument(..., help="Customer ID"),
    product: List[int] = typer.Option(
        ...,
        "--product",
        "-p",
        help="Product ID, repeat once per line"
    ),
    quantity: List[int] = typer.Option(
        ...,
        "--quantity",
        "-q",
        help="Quantity, repeat once per line in the same order as --product"
    )
):
    """
    Create an invoice for a customer.

    Lines are paired by position: the first --quantity applies to the first
    --product, and so on. Nothing is written unless every line succeeds.
    """
    dao = get_dao(_db_path(ctx))
    try:
        customer = dao.find_customer(customer_id)
        if customer is None:
            console.print(f"[yellow]No customer with ID {customer_id}[/]")
            sys.exit(EXIT_CODE_NOT_FOUND)

        invoice_id = dao.create_invoice(customer, product, quantity)
        invoice = dao.find_invoice(invoice_id)
        items = dao.items_for_invoice(invoice_id)
    except Exception as e:
        _fail(e)

    console.print(f"[green]✓[/] Created invoice {invoice_id} for {customer.last_name}")

    table = Table(title=f"Invoice {invoice_id}")
    table.add_column("Item", justify="right")
    table.add_column("Product", justify="right")
    table.add_column("Quantity", justify="right")
    table.add_column("Unit cost", justify="right")
    for item in items:
        table.add_row(
            str(item.item),
            str(item.product_id),
            str(item.quantity),
            _format_currency(item.cost)
        )
    console.print(table)
    console.print(f"Invoice total: {_format_currency(invoice.total)}")


if __name__ == "__main__":
    app()
