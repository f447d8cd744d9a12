"""
Command line entry point for bolt_stream.

``bolt-stream replay FILE`` streams a saved assistant response through the
parser in fixed-size chunks, the way a chat client would receive it, and
prints the resulting callback sequence.
"""
import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from .actions import ActionCallbackData, ArtifactCallbackData, UnknownAction
from .config import ParserConfig, load_config
from .constants import APP_DESCRIPTION, APP_NAME, APP_VERSION
from .errors import ActionTagError, ConfigError
from .parser import ParserCallbacks, StreamingMessageParser
from .screens import ScreenRegistry

logger = logging.getLogger(__name__)

DETAIL_WIDTH = 60


@dataclass
class ParseEvent:
    """One callback observed during a replay."""
    seq: int
    event: str
    action_id: str = ""
    type: str = ""
    detail: str = ""


@dataclass
class EventRecorder:
    """Collects parser callbacks as ParseEvent rows.

    Closed actions are also forwarded to ``registry`` when one is given.
    """
    registry: Optional[ScreenRegistry] = None
    events: list[ParseEvent] = field(default_factory=list)

    def callbacks(self) -> ParserCallbacks:
        return ParserCallbacks(
            on_artifact_open=lambda data: self._artifact("artifact_open", data),
            on_artifact_close=lambda data: self._artifact("artifact_close", data),
            on_action_open=lambda data: self._action("action_open", data),
            on_action_stream=lambda data: self._action("action_stream", data),
            on_action_close=self._close_action,
        )

    def _artifact(self, event: str, data: ArtifactCallbackData) -> None:
        self.events.append(ParseEvent(
            seq=len(self.events) + 1,
            event=event,
            type=data.type or "",
            detail=f"{data.id or '?'}: {data.title or ''}",
        ))

    def _action(self, event: str, data: ActionCallbackData) -> None:
        action = data.action
        if isinstance(action, UnknownAction):
            action_type = action.declared_type or "?"
        else:
            action_type = action.type.value
        self.events.append(ParseEvent(
            seq=len(self.events) + 1,
            event=event,
            action_id=data.action_id,
            type=action_type,
            detail=_shorten(action.content),
        ))

    def _close_action(self, data: ActionCallbackData) -> None:
        self._action("action_close", data)
        if self.registry is not None:
            self.registry.handle_action(data)


def _shorten(text: str, width: int = DETAIL_WIDTH) -> str:
    text = text.replace("\n", "\\n")
    if len(text) > width:
        return text[:width - 3] + "..."
    return text


def replay(
    text: str,
    chunk_size: int,
    message_id: str = "replay",
    config: Optional[ParserConfig] = None,
    registry: Optional[ScreenRegistry] = None,
) -> tuple[str, list[ParseEvent]]:
    """Feed ``text`` to a fresh parser in growing prefixes.

    Args:
        text: Full assistant response
        chunk_size: Characters added per parse call
        message_id: Message id used for every call
        config: Parser settings
        registry: Optional registry receiving closed actions

    Returns:
        The concatenated output and the recorded events
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    recorder = EventRecorder(registry=registry)
    parser = StreamingMessageParser(callbacks=recorder.callbacks(), config=config)

    output: list[str] = []
    for end in range(chunk_size, len(text) + chunk_size, chunk_size):
        output.append(parser.parse(message_id, text[:end]))

    logger.debug(f"Replayed {len(text)} characters in chunks of {chunk_size}")
    return "".join(output), recorder.events


def configure_logging(level: str, console: Optional[Console] = None) -> None:
    """Route log records through rich at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def render_events(events: list[ParseEvent]) -> Table:
    table = Table(title="Parser events", border_style="cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Event", style="bold")
    table.add_column("Action")
    table.add_column("Type", style="magenta")
    table.add_column("Detail", style="dim")

    for event in events:
        table.add_row(str(event.seq), event.event, event.action_id, event.type, event.detail)

    return table


def render_screens(registry: ScreenRegistry) -> Tree:
    tree = Tree("[bold]Screens[/bold]")

    for screen in registry.screens.values():
        marker = " [green](active)[/green]" if screen.is_active else ""
        branch = tree.add(f"{screen.id} [dim]{screen.type}[/dim] {screen.file_path}{marker}")
        for trigger in screen.navigation_triggers:
            branch.add(f"{trigger.trigger} -> {trigger.to_screen} [dim]{trigger.navigation_type}[/dim]")
        for name in screen.components:
            branch.add(f"[cyan]{name}[/cyan]")

    if registry.components:
        components = tree.add("[bold]Components[/bold]")
        for component in registry.components.values():
            components.add(f"{component.name} [dim]{component.type}[/dim] {component.file_path}")

    return tree


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME.replace("_", "-"),
        description=APP_DESCRIPTION
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{APP_NAME} {APP_VERSION}"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to config file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser(
        "replay",
        help="Stream a saved response through the parser and show the events"
    )
    replay_parser.add_argument("file", type=str, help="File holding the assistant response")
    replay_parser.add_argument(
        "-n", "--chunk-size",
        type=int,
        help="Characters appended per parse call"
    )
    replay_parser.add_argument(
        "--message-id",
        type=str,
        default="replay",
        help="Message id passed to the parser"
    )
    replay_parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    replay_parser.add_argument(
        "--output",
        action="store_true",
        help="Also print the produced markup"
    )
    replay_parser.add_argument(
        "--screens",
        action="store_true",
        help="Also print the screens and components declared by the response"
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None, console: Optional[Console] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    console = console or Console()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 2

    configure_logging(args.log_level or config.log_level, console)
    chunk_size = args.chunk_size or config.chunk_size

    path = Path(args.file)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Cannot read {path}:[/red] {e}")
        return 2

    registry = ScreenRegistry() if args.screens else None

    try:
        output, events = replay(text, chunk_size, args.message_id, config, registry)
    except ActionTagError as e:
        console.print(f"[red]Malformed action tag:[/red] {e}")
        return 1
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 2

    console.print(render_events(events))

    if args.output:
        console.rule("Output")
        console.print(output, markup=False, highlight=False)

    if registry is not None:
        console.print(render_screens(registry))

    return 0


if __name__ == "__main__":
    sys.exit(main())
