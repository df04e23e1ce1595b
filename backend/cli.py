"""
Marketplace CLI.

Command-line interface for database setup and local operation.

Usage:
    python backend/cli.py db-init
    python backend/cli.py create-user owner@example.com --name "Ana" --role RESTAURANT
    python backend/cli.py serve --reload
"""

import sys
from pathlib import Path
from typing import Optional

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="marketplace",
    help="Restaurant marketplace CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create missing tables and seed the cuisine catalog."""
    from sqlalchemy.exc import SQLAlchemyError

    from rest_api.seed import create_tables, seed
    from shared.infrastructure.db import SessionLocal, engine

    console.print("[blue]Initializing database[/blue]")
    try:
        create_tables(engine)
        with SessionLocal() as db:
            created = seed(db)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Database initialization failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Tables ready, {created} cuisines added[/green]")


@app.command()
def seed(
    env: str = typer.Option("development", help="Environment to seed"),
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding production"),
):
    """Seed reference data (idempotent)."""
    from rest_api.seed import seed as seed_reference_data
    from shared.infrastructure.db import SessionLocal

    if env == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    with SessionLocal() as db:
        created = seed_reference_data(db)

    if created:
        console.print(f"[green]✓ Added {created} cuisines[/green]")
    else:
        console.print("[yellow]Reference data already present[/yellow]")


@app.command()
def cuisines():
    """List the cuisine catalog."""
    from rest_api.services.domain import CuisineService
    from shared.infrastructure.db import SessionLocal

    with SessionLocal() as db:
        rows = CuisineService(db).list_all()

    if not rows:
        console.print("[yellow]No cuisines. Run db-init first.[/yellow]")
        return

    table = Table(title="Cuisines")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    for cuisine in rows:
        table.add_row(str(cuisine.id), cuisine.name)
    console.print(table)


# =============================================================================
# User Commands
# =============================================================================

@app.command()
def create_user(
    email: str = typer.Argument(..., help="Login email"),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    role: str = typer.Option("CLIENT", "--role", "-r", help="CLIENT or RESTAURANT"),
    address: str = typer.Option("-", "--address", help="Postal address"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
):
    """Create a user account."""
    from pydantic import ValidationError as SchemaValidationError

    from rest_api.services.domain import UserService
    from shared.infrastructure.db import SessionLocal
    from shared.utils.exceptions import AppException
    from shared.utils.schemas import UserCreate

    try:
        data = UserCreate(name=name, email=email, password=password, role=role, address=address)
    except SchemaValidationError as e:
        console.print(f"[red]✗ Invalid input: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(1)

    with SessionLocal() as db:
        try:
            user = UserService(db).register(data)
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    console.print(f"[green]✓ Created {user.role} user {user.email} (id={user.id})[/green]")


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to REST_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    from shared.config.settings import settings

    port = port or settings.rest_api_port
    console.print(f"[blue]Starting REST API on {host}:{port}[/blue]")
    uvicorn.run(
        "rest_api.main:app",
        host=host,
        port=port,
        reload=reload,
        app_dir=str(Path(__file__).parent),
    )


@app.command()
def version():
    """Show version information."""
    console.print("[bold]Marketplace Backend[/bold]")
    console.print("Version: 0.1.0")
    console.print(f"Python: {sys.version.split()[0]}")


if __name__ == "__main__":
    app()
