"""
Command-line interface for supp_ix.

Commands:
- explain: Human-readable explanation of a supplement/drug interaction
- evidence: Structured evidence bundle for a supplement/drug pair
- search: Fuzzy compound search
- compound: Compound profile with interactions
- check: Batch check supplements against medications
- safety: CAERS safety signals for a supplement
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Annotated, Any

import typer
from rich.console import Console

from supp_ix.client import VaultClient
from supp_ix.config import settings
from supp_ix.errors import VaultError
from supp_ix.log import configure_logging
from supp_ix.service import explain_interaction, get_evidence

app = typer.Typer(
    name="supp-ix",
    help="Supplement-drug interaction evidence CLI",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR")
    ] = None,
):
    """Configure logging before any command runs."""
    configure_logging(log_level or settings.log_level)


def _run(operation: Callable[[VaultClient], Awaitable[Any]]) -> None:
    """Open a client, run one operation and print its JSON result."""

    async def runner() -> Any:
        async with VaultClient() as client:
            return await operation(client)

    try:
        result = asyncio.run(runner())
    except VaultError as e:
        err_console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1) from e
    console.print_json(data=result)


@app.command()
def explain(
    supplement: str = typer.Argument(..., help="Supplement name"),
    drug: str = typer.Argument(..., help="Drug name"),
):
    """Explain WHY an interaction is risky: mechanism, severity, evidence summary."""
    _run(lambda client: explain_interaction(client, supplement, drug))


@app.command()
def evidence(
    supplement: str = typer.Argument(..., help="Supplement name"),
    drug: str = typer.Argument(..., help="Drug name"),
):
    """Raw evidence bundle: FAERS counts, CYP data, research grades."""
    _run(lambda client: get_evidence(client, supplement, drug))


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    limit: int = typer.Option(5, "--limit", "-n", help="Max results"),
):
    """Fuzzy search for supplement compounds (aliases, brands, misspellings)."""

    async def operation(client: VaultClient) -> dict:
        response = await client.search_compounds(query, limit=limit)
        return response.model_dump()

    _run(operation)


@app.command()
def compound(
    compound_id: str = typer.Argument(..., help="Compound ID from search"),
):
    """Detailed compound profile with interactions, research findings, and aliases."""
    _run(lambda client: client.get_compound_info(compound_id))


@app.command()
def check(
    supplements: Annotated[list[str], typer.Option("--supplement", "-s", help="Supplement names")],
    medications: Annotated[list[str], typer.Option("--medication", "-m", help="Medication names")],
):
    """Check if supplements are safe with medications."""
    _run(lambda client: client.check_interactions(supplements, medications))


@app.command()
def safety(
    compound_name: str = typer.Argument(..., help="Supplement name, e.g. kava"),
):
    """FDA adverse event safety signals (CAERS) for a supplement."""
    _run(lambda client: client.get_safety_profile(compound_name))


if __name__ == "__main__":
    app()
