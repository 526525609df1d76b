from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Callable, Coroutine
from typing import Any

from ummah_speaks.cli import output as out
from ummah_speaks.cli.config import (
    Config,
    config_exists,
    config_path_display,
    load_config,
    save_config,
)
from ummah_speaks.pipeline.run import PipelineRun
from ummah_speaks.pipeline.states import StageStatus

DESCRIPTION = """\
ummah-speaks · a message of light for how you feel

Describe how you are feeling in your own words. ummah-speaks names the
theme, finds a hadith that speaks to it, and writes you a short personal
reflection. Finished reflections are kept in a small local journal.

Quick start: ummah-speaks reflect "I feel so alone and scared"
"""


# ── Infrastructure helpers ──────────────────────────────────────────


def _config_to_dict(cfg: Config) -> dict:
    """Convert CLI Config into the canonical config dict for UmmahSpeaks."""
    return {
        "storage": {"provider": cfg.storage_provider, "config": cfg.storage_config},
        "llm": {"api_key": cfg.api_key, "model": cfg.model},
    }


def _build_app(cfg: Config, *, reveal_interval: float | None = None):
    from ummah_speaks import UmmahSpeaks

    cfg.ensure_dirs()
    if reveal_interval is None:
        return UmmahSpeaks.from_config(_config_to_dict(cfg))
    return UmmahSpeaks.from_config(
        _config_to_dict(cfg), reveal_interval=reveal_interval
    )


def _require_api_key(cfg: Config) -> None:
    """Exit with guidance if no API key is configured."""
    if cfg.api_key:
        return
    out.error(
        "Groq API key not configured. "
        "Run 'ummah-speaks config set-key' or set GROQ_API_KEY."
    )
    sys.exit(1)


def _resolve_name(args: argparse.Namespace, cfg: Config) -> str:
    if args.name:
        return args.name.strip()
    if cfg.user_name:
        return cfg.user_name
    if sys.stdin.isatty():
        name = input("  What should we call you? ").strip()
        if name:
            cfg.user_name = name
            save_config(cfg)
            return name
    return ""


class _RunPrinter:
    """Prints each stage once, as soon as the run reaches it."""

    def __init__(self, *, animate: bool) -> None:
        self._animate = animate
        self._shown: set[str] = set()
        self._revealed = 0

    def _once(self, key: str) -> bool:
        if key in self._shown:
            return False
        self._shown.add(key)
        return True

    def __call__(self, run: PipelineRun) -> None:
        if run.classification_status is StageStatus.ERROR and self._once("c-err"):
            out.error(run.error_message or "Something went wrong.")
            return
        if run.label is not None and self._once("label"):
            out.success(f"Theme: {out.bold(run.label.value)}")

        if run.retrieval_status is StageStatus.ERROR and self._once("r-err"):
            out.error(run.error_message or "No hadith found.")
            return
        if run.passage is not None and self._once("passage"):
            passage = run.passage
            out.header("Hadith")
            out.quote(passage.text)
            source = " · ".join(
                part
                for part in (passage.collection.title(), passage.book_name)
                if part
            )
            if source:
                out.info(out.dim(source))

        if run.composition_status is StageStatus.ERROR and self._once("m-err"):
            out.error(run.error_message or "Could not generate a reflection.")
            return
        if run.message is None:
            return

        if self._once("message"):
            out.header("Message of Light")
            out.stream("  ")
            if not self._animate:
                out.stream(run.message)
                self._revealed = len(run.message)
        if self._animate and len(run.revealed) > self._revealed:
            out.stream(run.revealed[self._revealed :])
            self._revealed = len(run.revealed)

        if run.is_complete and self._once("done"):
            print("\n")
            state = run.state
            if getattr(state, "entry_id", None):
                out.success("Saved to your journal")


# ── reflect ─────────────────────────────────────────────────────────


async def cmd_reflect(args: argparse.Namespace) -> None:
    """Run the full feeling → hadith → reflection pipeline."""
    cfg = load_config()
    _require_api_key(cfg)

    feeling = " ".join(args.text or []).strip()
    if not feeling and sys.stdin.isatty():
        feeling = input("  How are you feeling? ").strip()
    if not feeling:
        out.error("Please share how you are feeling.")
        sys.exit(1)

    name = _resolve_name(args, cfg)
    app = _build_app(cfg, reveal_interval=0 if args.no_animate else None)
    app.on_update(_RunPrinter(animate=not args.no_animate))

    print()
    run = await app.reflect(feeling, name=name)
    if not run.is_complete:
        print()
        out.info("You can try again whenever you are ready.")
        out.next_step("ummah-speaks reflect")
        sys.exit(1)


# ── journal ─────────────────────────────────────────────────────────


async def cmd_journal_list(args: argparse.Namespace) -> None:
    """Show saved reflections, newest first."""
    from ummah_speaks.journal.format import format_relative

    cfg = load_config()
    app = _build_app(cfg)
    entries = app.journal_entries(limit=args.limit)

    if not entries:
        out.info("Your journal is empty.")
        out.next_step('ummah-speaks reflect "how you feel"', "write your first entry")
        return

    out.header(f"Journal ({len(entries)} entries)")
    for entry in entries:
        print()
        when = format_relative(entry.timestamp)
        if entry.date_label:
            when = f"{when} · {entry.date_label}"
        out.kv(entry.label, out.dim(when))
        out.info(f'"{entry.feeling}"')
        out.quote(entry.passage.text)
        out.info(out.gold(entry.reflection))
    print()


async def cmd_journal_clear(args: argparse.Namespace) -> None:
    """Delete every saved reflection."""
    cfg = load_config()
    app = _build_app(cfg)

    if not args.yes:
        answer = input("  Clear your whole journal? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            out.info("Journal kept.")
            return

    app.clear_journal()
    out.success("Journal cleared")


# ── config ──────────────────────────────────────────────────────────


async def cmd_config_show(args: argparse.Namespace) -> None:
    """Display current configuration."""
    cfg = load_config()

    out.header(f"Configuration ({config_path_display()})")
    print()

    if cfg.api_key:
        masked = cfg.api_key[:7] + "..." + cfg.api_key[-4:]
        out.kv("API key", masked)
    else:
        out.kv("API key", out.dim("not set"))

    out.kv("Model", cfg.model)
    out.kv("Name", cfg.user_name or out.dim("not set"))
    out.kv("Storage", cfg.storage_provider)
    out.kv("Data directory", cfg.data_dir)

    print()
    out.info("To change settings:")
    out.next_step("ummah-speaks config set-key", "change the Groq API key")
    out.next_step("ummah-speaks config set-name", "change how you are addressed")
    print()


async def cmd_config_set_key(args: argparse.Namespace) -> None:
    """Prompt for and save a new API key."""
    cfg = load_config() if config_exists() else Config()

    out.info("Get an API key at https://console.groq.com/keys")
    print()

    if cfg.api_key:
        masked = cfg.api_key[:7] + "..." + cfg.api_key[-4:]
        out.kv("Current key", masked)

    key = input("  New API key: ").strip()
    if not key:
        out.warn("No key entered; keeping current value.")
        return

    cfg.api_key = key
    path = save_config(cfg)
    out.success(f"API key saved to {path}")


async def cmd_config_set_name(args: argparse.Namespace) -> None:
    """Save the name reflections address you by."""
    cfg = load_config() if config_exists() else Config()

    name = (args.name or input("  Your name: ")).strip()
    if not name:
        out.warn("No name entered; keeping current value.")
        return

    cfg.user_name = name
    path = save_config(cfg)
    out.success(f"Name saved to {path}")


async def cmd_config_path(args: argparse.Namespace) -> None:
    """Print the config file location."""
    print(config_path_display())


# ── Parser ──────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ummah-speaks",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed progress logs (stage transitions, lookups)",
    )
    sub = parser.add_subparsers(dest="command", title="commands")

    p_reflect = sub.add_parser("reflect", help="Share a feeling and receive guidance")
    p_reflect.add_argument("text", nargs="*", help="How you are feeling")
    p_reflect.add_argument("--name", help="Name to be addressed by")
    p_reflect.add_argument(
        "--no-animate",
        action="store_true",
        help="Print the message at once instead of letter by letter",
    )

    p_journal = sub.add_parser("journal", help="View or clear saved reflections")
    p_journal.set_defaults(limit=None)
    journal_sub = p_journal.add_subparsers(
        dest="journal_command", title="journal commands"
    )
    p_journal_list = journal_sub.add_parser("list", help="List saved reflections")
    p_journal_list.add_argument(
        "--limit", type=int, default=None, help="Max entries to show"
    )
    p_journal_clear = journal_sub.add_parser("clear", help="Delete all entries")
    p_journal_clear.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )

    p_cfg = sub.add_parser("config", help="View and change settings")
    cfg_sub = p_cfg.add_subparsers(dest="config_command", title="config commands")

    cfg_sub.add_parser("show", help="Show current settings")
    cfg_sub.add_parser("set-key", help="Change the Groq API key")
    p_cfg_name = cfg_sub.add_parser("set-name", help="Change your display name")
    p_cfg_name.add_argument("name", nargs="?", help="Name to be addressed by")
    cfg_sub.add_parser("path", help="Print config file location")

    return parser


# ── Dispatch ────────────────────────────────────────────────────────

_CommandHandler = Callable[[argparse.Namespace], Coroutine[Any, Any, None]]

_COMMAND_MAP: dict[str, _CommandHandler] = {
    "reflect": cmd_reflect,
}

_JOURNAL_MAP: dict[str, _CommandHandler] = {
    "list": cmd_journal_list,
    "clear": cmd_journal_clear,
}

_CONFIG_MAP: dict[str, _CommandHandler] = {
    "show": cmd_config_show,
    "set-key": cmd_config_set_key,
    "set-name": cmd_config_set_name,
    "path": cmd_config_path,
}


def main() -> None:
    import logging

    parser = _build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="  %(name)s: %(message)s",
        )
    logging.getLogger("LiteLLM").setLevel(logging.CRITICAL)
    logging.getLogger("litellm").setLevel(logging.CRITICAL)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if not args.command:
        out.banner()
        parser.print_help()
        return

    if args.command == "journal":
        handler = _JOURNAL_MAP.get(args.journal_command or "list")
    elif args.command == "config":
        if not args.config_command:
            parser.parse_args(["config", "--help"])
            return
        handler = _CONFIG_MAP.get(args.config_command)
    else:
        handler = _COMMAND_MAP.get(args.command)

    if handler is None:
        parser.print_help()
        return

    try:
        asyncio.run(handler(args))
    except KeyboardInterrupt:
        print()
