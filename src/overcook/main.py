"""
Left OverCook - CLI Entry Point.

Usage:
    overcook serve                      Start the web API
    overcook suggest chicken rice       Generate recipes from the terminal
    overcook health                     Check configuration
    overcook --help                     Show help
"""

import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner

app = typer.Typer(
    name="overcook",
    help="Left OverCook - turn leftovers into recipes.",
    add_completion=False,
)
console = Console()


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web API server."""
    import os

    import uvicorn

    # Hosting platforms set PORT
    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Left OverCook API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "overcook.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
    )


@app.command()
def suggest(
    ingredients: list[str] = typer.Argument(..., help="Leftover ingredients"),
    equipment: list[str] = typer.Option([], "--equipment", "-e", help="Available equipment (repeatable)"),
    cuisine: list[str] = typer.Option([], "--cuisine", "-c", help="Preferred cuisine (repeatable)"),
    diet: list[str] = typer.Option([], "--diet", "-d", help="Dietary restriction (repeatable)"),
    max_minutes: int = typer.Option(120, "--max-minutes", help="Longest acceptable prep time"),
    max_calories: int = typer.Option(1000, "--max-calories", help="Highest acceptable calories"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all LLM prompts to prompt_logs/"),
) -> None:
    """Generate one batch of recipes without the web UI."""
    from overcook.errors import OvercookError
    from overcook.llm.prompt_logger import enable_prompt_logging
    from overcook.logging_setup import configure_logging
    from overcook.recipes.generator import RecipeGenerator
    from overcook.recipes.session_store import SessionRecipeStore
    from overcook.recipes.wizard import Wizard
    from overcook.session_storage import SessionStorage

    load_dotenv()
    configure_logging("WARNING")

    if log_prompts:
        enable_prompt_logging(True)
        console.print("[dim]Prompt logging enabled. Check prompt_logs/ afterwards.[/dim]")

    wizard = Wizard()
    store = SessionRecipeStore(SessionStorage(), RecipeGenerator())

    try:
        for name in ingredients:
            wizard.add_ingredient(name)
        wizard.complete_ingredients(equipment, [])
        wizard.set_preferences(
            cuisines=cuisine,
            calorie_range=(0, max_calories),
            time_range=(0, max_minutes),
            dietary_restrictions=diet,
        )
        with Live(Spinner("dots", text="Cooking up ideas..."), console=console, transient=True):
            batch = asyncio.run(store.generate(wizard.criteria()))
    except OvercookError as e:
        console.print(f"\n[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    if not batch.recipes:
        console.print("[yellow]No recipes came back. Try different ingredients.[/yellow]")
        return

    for recipe in batch.recipes:
        steps = "\n".join(f"{n}. {step}" for n, step in enumerate(recipe.instructions, 1))
        console.print(
            Panel(
                f"[dim]{recipe.description}[/dim]\n\n"
                f"[bold]Cuisine:[/bold] {recipe.cuisine_type or '-'}   "
                f"[bold]Time:[/bold] {recipe.prep_time} min   "
                f"[bold]Calories:[/bold] {recipe.calories}\n\n"
                f"[bold]Ingredients:[/bold] {', '.join(recipe.ingredients)}\n"
                f"[bold]Equipment:[/bold] {', '.join(recipe.equipment) or '-'}\n\n"
                f"{steps}",
                title=f"[bold green]{recipe.title}[/bold green]",
                border_style="green",
            )
        )


@app.command()
def health() -> None:
    """Check system health and configuration."""
    from overcook.config import get_settings

    load_dotenv()
    console.print("\n[bold]Left OverCook Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.overcook_env}")
        console.print(f"   Log level: {settings.log_level}")

        if settings.openai_api_key:
            console.print("[green]OK[/green] LLM API key configured")
        else:
            console.print("[yellow]WARN[/yellow] LLM API key is empty")

        if settings.supabase_url.startswith("https://"):
            console.print("[green]OK[/green] Supabase URL configured")
        else:
            console.print("[red]FAIL[/red] Supabase URL missing or invalid")

        if settings.supabase_service_role_key:
            console.print("[green]OK[/green] Supabase service key configured")
        else:
            console.print("[yellow]WARN[/yellow] Supabase service key missing (auth and leaderboard will fail)")

        console.print("\n[green]All checks passed![/green]")

    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from overcook import __version__

    console.print(f"Left OverCook version {__version__}")


if __name__ == "__main__":
    app()
