"""
Console front-end.

`terminal-resume shell` runs a terminal session in this process and draws
the scrollback with rich; `terminal-resume serve` starts the web server.
"""

import argparse
import asyncio
import logging
import webbrowser

from rich.console import Console
from rich.markdown import Markdown
from rich.text import Text

from .ai_client import AIClient
from .config import HOST, PORT
from .content_service import ContentService
from .models import LineKind, TerminalLine
from .speech_service import SpeechService
from .terminal import TerminalSession

logger = logging.getLogger(__name__)

console = Console()

LINE_STYLES = {
    LineKind.NORMAL: "white",
    LineKind.ERROR: "bold red",
    LineKind.PROCESSING: "cyan",
    LineKind.SEPARATOR: "dim green",
    LineKind.USER_INPUT: "bold yellow",
    LineKind.ASCII_ART: "bold green",
    LineKind.TAGLINE: "italic green",
    LineKind.AI_RESPONSE: "magenta",
    LineKind.MENU_HEADER: "bold cyan",
}


def render_line(line: TerminalLine):
    if line.is_markdown:
        return Markdown(line.text)
    return Text(line.text, style=LINE_STYLES.get(line.kind, "white"))


def render_screen(session: TerminalSession):
    console.clear()
    for line in session.lines:
        console.print(render_line(line))


def perform_effects(session: TerminalSession):
    for effect in session.drain_effects():
        if effect.kind == "open_url":
            webbrowser.open(effect.value)
        elif effect.kind == "audio":
            console.print("[dim](audio reply available in the web terminal)[/dim]")


async def run_shell():
    async with ContentService() as content:
        assistant = AIClient()
        speech = SpeechService()
        session = TerminalSession(content, assistant, speech)
        try:
            await session.boot()
            render_screen(session)
            while not session.closed:
                try:
                    text = await asyncio.to_thread(console.input, "[bold green]> [/bold green]")
                except (EOFError, KeyboardInterrupt):
                    break
                if await session.submit(text):
                    render_screen(session)
                    perform_effects(session)
        finally:
            await assistant.close()
            await speech.close()


def serve(reload: bool = False):
    import uvicorn

    uvicorn.run(
        "terminal_resume.main:app",
        host=HOST,
        port=PORT,
        reload=reload,
        log_level="info",
    )


def main(argv=None):
    parser = argparse.ArgumentParser(prog="terminal-resume", description="Portfolio terminal")
    parser.add_argument("--verbose", action="store_true", help="Show service logs")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("shell", help="Run the terminal in this console (default)")
    serve_parser = sub.add_parser("serve", help="Start the web server")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args(argv)

    # serve logs at INFO; the shell only with --verbose
    verbose = args.verbose or args.command == "serve"
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if args.command == "serve":
        serve(reload=args.reload)
    else:
        asyncio.run(run_shell())


if __name__ == "__main__":
    main()
