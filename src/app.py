"""Application entry point for the chatfilter tools."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console
from rich.text import Text

import settings
from adapters.console_renderer import render_line, render_markup
from adapters.json_config_source import JsonConfigSource
from adapters.transcript_client import TranscriptChatClient
from adapters.transcript_mapper import read_events
from core.models import ChatMessage
from core.processor import ChatFilterProcessor, EventKind

NAME = "CHATFILTER"
FONT = "tarty-1"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _file_handler(file_cfg: dict) -> logging.Handler:
    path = file_cfg.get("path", "logs/chatfilter.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging(config: dict) -> None:
    """Set up console and rotating-file logging from the ``logging`` section."""

    if not config.get("enabled", False):
        return

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_file_handler(file_cfg))
    if not handlers:
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def _build_processor(
    config_path: Optional[str],
    client: TranscriptChatClient,
) -> ChatFilterProcessor:
    raw = settings.load_json_config(config_path)
    _configure_logging(settings.logging_config(raw))

    processor = ChatFilterProcessor(client, client, JsonConfigSource(config_path))
    processor.start_up()
    return processor


def _replay(args: argparse.Namespace) -> None:
    _print_banner()
    logger = logging.getLogger(__name__)
    console = Console()

    client = TranscriptChatClient(
        local_player=args.me,
        friends=args.friend or [],
        clan_members=args.clan or [],
    )
    processor = _build_processor(args.config, client)
    logger.info("Replaying %s", args.transcript)

    events = 0
    with open(args.transcript, "r", encoding="utf-8") as handle:
        for kind, event in read_events(handle):
            events += 1
            if kind is EventKind.CHAT_MESSAGE:
                # The host adds the line first, then notifies listeners.
                client.add_message(event)
            processor.dispatch(kind, event)
            if kind is EventKind.OVERHEAD_TEXT_CHANGED:
                label = Text(f"[overhead] {event.actor_name}: ", style="dim")
                console.print(Text.assemble(label, render_markup(event.overhead_text)))

    # Render the panel the way the host does: every line goes through the
    # filter check, hidden lines are skipped.
    hidden = 0
    for line in client.chat_lines():
        message = ChatMessage(
            message_id=line.message_id,
            message_type=line.message_type,
            name=line.name,
            text=line.value,
            sender=line.sender,
        )
        decision = processor.dispatch(EventKind.CHAT_FILTER_CHECK, message)
        if decision.blocked:
            hidden += 1
            continue
        console.print(render_line(line, decision.text))

    logger.info(
        "Replay complete: events=%s, lines=%s, hidden=%s",
        events,
        len(client.lines),
        hidden,
    )


def _check(args: argparse.Namespace) -> None:
    console = Console()
    client = TranscriptChatClient(local_player=args.me)
    processor = _build_processor(args.config, client)

    verdict = processor.censor(args.name, args.message)
    eligible = processor.should_filter_player(args.name)
    console.print(f"eligible: {eligible}")
    console.print(f"verdict:  {verdict.action.value}")
    if verdict.text is not None:
        console.print(Text.assemble("text:     ", render_markup(verdict.text)))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="chatfilter")
    parser.add_argument("--config", help="Path to config.json (defaults to CHATFILTER_CONFIG)")
    parser.add_argument("--me", help="Local player name; own messages are never filtered")
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay = subparsers.add_parser("replay", help="Replay a JSONL transcript through the filter")
    replay.add_argument("transcript")
    replay.add_argument("--friend", action="append", help="Treat NAME as a friend")
    replay.add_argument("--clan", action="append", help="Treat NAME as a clan member")

    check = subparsers.add_parser("check", help="Show the verdict for a single message")
    check.add_argument("name")
    check.add_argument("message")

    args = parser.parse_args(argv)
    if args.command == "replay":
        _replay(args)
        return
    _check(args)


if __name__ == "__main__":
    main()
