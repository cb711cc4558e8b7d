"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import CredentialStatus, create_provider
from ..i18n import Localizer
from ..logging_config import configure_logging
from ..session import (
    Availability,
    ChatSession,
    DisplayMessage,
    ProviderErrorClassifier,
    Sender,
    StaticErrorClassifier,
    SubmitOutcome,
    create_session_from_settings,
)
from ..session.errors import ConfigurationUnavailableError
from .providers import (
    ConsoleNotifier,
    check_connection,
    get_localizer,
    get_settings,
    require_credential,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="tickerchat",
    help="Conversational AI trading assistant in the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

QUIT_COMMANDS = {"/quit", "/exit"}

STATUS_STYLES = {
    Availability.UNCONFIGURED: "yellow",
    Availability.OFFLINE: "red",
    Availability.BUSY: "cyan",
    Availability.READY: "green",
}


def render_message(message: DisplayMessage, localizer: Localizer) -> None:
    """Print one transcript entry as a chat bubble."""
    if message.sender == Sender.USER:
        console.print(Panel(
            escape(message.text),
            title=localizer.translate("label.user"),
            title_align="right",
            border_style="blue",
        ))
    else:
        console.print(Panel(
            escape(message.text),
            title=localizer.translate("label.bot"),
            title_align="left",
            border_style="magenta",
        ))


def status_line(session: ChatSession, localizer: Localizer, provider: str) -> str:
    """Advisory status text for the session header."""
    state = session.snapshot().availability
    text = localizer.translate(f"status.{state.value}", provider=provider)
    return f"[{STATUS_STYLES[state]}]{escape(text)}[/{STATUS_STYLES[state]}]"


@app.command()
def chat(
    subject: str = typer.Argument(..., help="Subject of the conversation, e.g. a ticker symbol"),
    language: str = typer.Option("en", "--language", "-l", help="Display language (en, it)"),
    detailed_errors: bool = typer.Option(
        False,
        "--detailed-errors",
        help="Show category-specific guidance when a request fails"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override TICKERCHAT_LOG_LEVEL"
    ),
):
    """Start an interactive conversation about SUBJECT."""
    try:
        settings = get_settings()
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error: invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    configure_logging(log_level or settings.log_level)

    try:
        require_credential(settings)
    except ConfigurationUnavailableError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    localizer = get_localizer(language)
    classifier = (
        ProviderErrorClassifier(localizer) if detailed_errors else StaticErrorClassifier(localizer)
    )

    async def _chat():
        session = create_session_from_settings(
            subject,
            settings,
            localizer=localizer,
            notifier=ConsoleNotifier(console),
            classifier=classifier,
        )
        try:
            console.print(f"[bold]{escape(session.subject)}[/bold] - {status_line(session, localizer, settings.provider)}")
            console.print("[dim]Type /quit to exit.[/dim]")

            last_seen = 0
            for message in session.snapshot().transcript:
                render_message(message, localizer)
                last_seen = message.id

            while True:
                try:
                    text = console.input(f"[bold]{escape(localizer.translate('input.placeholder'))}[/bold] ")
                except (EOFError, KeyboardInterrupt):
                    console.print()
                    break

                if text.strip() in QUIT_COMMANDS:
                    break

                session.set_input(text)
                with console.status(localizer.translate("status.busy")):
                    outcome = await session.submit()

                if outcome == SubmitOutcome.REJECTED:
                    continue

                for message in session.snapshot().transcript:
                    if message.id > last_seen:
                        render_message(message, localizer)
                        last_seen = message.id
        finally:
            await session.close()

    asyncio.run(_chat())


@app.command()
def status(
    test: bool = typer.Option(
        False,
        "--test",
        help="Send a short request to verify the provider answers"
    ),
):
    """Show provider configuration and credential status."""
    try:
        settings = get_settings()
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error: invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    credential = settings.credential_status
    credential_styles = {
        CredentialStatus.PRESENT: "[green]+[/green] SET",
        CredentialStatus.MALFORMED: "[yellow]![/yellow] MALFORMED",
        CredentialStatus.MISSING: "[red]x[/red] NOT SET",
    }

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="bold cyan", width=18)
    table.add_column("Value")
    table.add_row("Provider", settings.provider)
    table.add_row("Model", settings.model)
    table.add_row("API key", credential_styles[credential])
    if settings.masked_key:
        table.add_row("Key prefix", settings.masked_key)
    table.add_row("Temperature", str(settings.temperature))
    table.add_row("Max tokens", str(settings.max_tokens))
    table.add_row(
        "Response timeout",
        f"{settings.response_timeout}s" if settings.response_timeout else "none"
    )
    console.print(table)

    if credential != CredentialStatus.PRESENT:
        raise typer.Exit(code=1)

    if test:
        async def _check():
            async with create_provider(settings) as provider:
                return await check_connection(
                    provider, settings.model, timeout=settings.response_timeout or 30.0
                )

        with console.status("Contacting provider..."):
            result = asyncio.run(_check())

        if result.success:
            console.print(f"[green]+[/green] Connection OK ({escape(result.model)}, {result.latency_ms}ms)")
        else:
            console.print(
                f"[red]x[/red] Connection failed ({result.error_kind.value}, {result.latency_ms}ms): "
                f"{escape(result.error or '')}"
            )
            raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
