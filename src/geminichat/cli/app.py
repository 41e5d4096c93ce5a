"""Main CLI application using Typer."""
import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from ..chat import ConversationSession
from ..rendering import CodeSegment, copy_text, extract_segments, render_message_text
from .providers import build_session_config, console_debug_callback, create_session, get_endpoint

# Create Typer app
app = typer.Typer(
    name="geminichat",
    help="Chat with Google Gemini from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_COMMANDS = ("exit", "quit", "q")

ModelOption = typer.Option(None, "--model", "-m", help="Gemini model (default: GEMINI_MODEL or gemini-2.5-flash)")
TemperatureOption = typer.Option(None, "--temperature", "-t", help="Sampling temperature (0.0 to 2.0)")
TopKOption = typer.Option(None, "--top-k", help="Top-k sampling cutoff")
TopPOption = typer.Option(None, "--top-p", help="Nucleus sampling mass (0.0 to 1.0)")
MaxTokensOption = typer.Option(None, "--max-output-tokens", help="Maximum reply length in tokens")
LogLevelOption = typer.Option(
    None,
    "--log-level",
    "-l",
    help="Show log output with level: debug (all), info, warning, or error"
)


def _session_config(
    temperature: float | None,
    top_k: int | None,
    top_p: float | None,
    max_output_tokens: int | None,
):
    try:
        return build_session_config(temperature, top_k, top_p, max_output_tokens)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]Invalid {field}: {error['msg']}[/red]")
        raise typer.Exit(code=1)


def last_reply_code_blocks(session: ConversationSession) -> list[CodeSegment]:
    """Code blocks of the most recent assistant reply, in order."""
    reply = session.transcript.last("assistant")
    if reply is None:
        return []
    return [segment for segment in extract_segments(reply.text) if isinstance(segment, CodeSegment)]


def print_reply(text: str) -> None:
    """Print an assistant reply, numbering code blocks for /copy."""
    console.print("[bold blue]Gemini:[/bold blue]")
    block_number = 0
    for unit in render_message_text(text):
        if unit.is_code:
            block_number += 1
            language = unit.segment.language or "text"
            console.print(Panel(
                unit.renderable,
                title=f"[{block_number}] {language}",
                title_align="left",
                subtitle=f"/copy {block_number}",
                subtitle_align="right",
                border_style="blue",
            ))
        else:
            console.print(unit.renderable)
    console.print()


def copy_code_block(session: ConversationSession, argument: str) -> None:
    """Handle `/copy N`."""
    blocks = last_reply_code_blocks(session)
    if not blocks:
        console.print("[yellow]The last reply has no code blocks[/yellow]")
        return
    try:
        index = int(argument or "1")
    except ValueError:
        console.print("[yellow]Usage: /copy N[/yellow]")
        return
    if not 1 <= index <= len(blocks):
        console.print(f"[yellow]Choose a block between 1 and {len(blocks)}[/yellow]")
        return
    if copy_text(blocks[index - 1].source_text):
        console.print(f"[green]Copied code block {index}[/green]")


@app.command()
def chat(
    model: str | None = ModelOption,
    temperature: float | None = TemperatureOption,
    top_k: int | None = TopKOption,
    top_p: float | None = TopPOption,
    max_output_tokens: int | None = MaxTokensOption,
    log_level: str | None = LogLevelOption,
):
    """Interactive chat in the console."""
    config = _session_config(temperature, top_k, top_p, max_output_tokens)

    async def _chat():
        async with get_endpoint(model) as endpoint:
            session = create_session(endpoint, config)
            if log_level:
                session.set_debug_callback(console_debug_callback(console, log_level))
            try:
                await chat_loop(session)
            finally:
                session.close()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


async def chat_loop(session: ConversationSession) -> None:
    """Read prompts from the console until the user leaves."""
    console.print(f"[bold cyan]Gemini Chat[/bold cyan] [dim]({session.model})[/dim]")
    console.print("[dim]Type 'exit', 'quit', or 'q' to leave; /copy N copies a code block; "
                  "/reconnect starts a new session[/dim]\n")

    with console.status("[dim]Connecting...[/dim]"):
        connected = await session.initialize()
    if not connected:
        console.print("[yellow]Warning: could not start a chat session, "
                      "messages will fail until /reconnect succeeds[/yellow]\n")

    while True:
        try:
            user_input = console.input("[bold cyan]You:[/bold cyan] ")
        except (KeyboardInterrupt, EOFError):
            console.print("\n[dim]Goodbye![/dim]")
            break

        command = user_input.strip()
        if not command:
            continue

        if command.lower() in EXIT_COMMANDS:
            console.print("[dim]Goodbye![/dim]")
            break

        if command.startswith("/copy"):
            copy_code_block(session, command[len("/copy"):].strip())
            continue

        if command == "/reconnect":
            with console.status("[dim]Connecting...[/dim]"):
                connected = await session.reinitialize()
            console.print("[green]Connected[/green]" if connected
                          else "[red]Reconnect failed[/red]")
            continue

        with console.status("[dim]Gemini is thinking...[/dim]"):
            reply = await session.submit(user_input)
        if reply is not None:
            print_reply(reply.text)


@app.command(name="tui")
def tui_command(
    model: str | None = ModelOption,
    temperature: float | None = TemperatureOption,
    top_k: int | None = TopKOption,
    top_p: float | None = TopPOption,
    max_output_tokens: int | None = MaxTokensOption,
    log_level: str | None = LogLevelOption,
):
    """Full-screen chat interface (Textual)."""
    config = _session_config(temperature, top_k, top_p, max_output_tokens)

    async def _tui():
        from ..ui import run_textual_tui

        async with get_endpoint(model) as endpoint:
            session = create_session(endpoint, config)
            await run_textual_tui(session=session, log_level=log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
