"""
Site Factory Setup - UI Components
Standardized headers, section styles and banners
"""

from rich.console import Console

BRAND = "sfsetup"

# Section heading styles
HEADING_STYLES = {
    "welcome": "bold white on magenta",
    "ssh": "bold white on cyan",
    "repo": "bold black on yellow",
    "dev_env": "bold white on cyan",
    "sites": "bold white on blue",
    "completion": "bold black on green",
}


def show_header(
    title: str,
    subtitle: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Setup", "Doctor")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Setup",
            details={"Config": "~/.ddev/global_config.yaml"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{BRAND}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [cyan]{value}[/cyan]")

    console.print()


def show_public_key(name: str, content: str, console: Console) -> None:
    """Print a public key so the operator can copy it."""
    console.print(f"\n[bold yellow]Your public SSH key ({name}):[/bold yellow]")
    # soft_wrap keeps the key on one logical line for copy/paste
    console.print(content, style="white on grey23", soft_wrap=True, markup=False)
    console.print(
        "\n[bold yellow]Copy the above key to add to Acquia services.[/bold yellow]"
    )


def show_completion(console: Console) -> None:
    console.print()
    console.print(f"[{HEADING_STYLES['completion']}] ✨ Setup complete! ✨ [/]")


def show_stopped(reason: str, console: Console) -> None:
    console.print()
    console.print(f"[bold red]Setup stopped:[/bold red] {reason}")
    console.print("[dim]Fix the problem above and run setup again.[/dim]")
