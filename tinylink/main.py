"""
TinyLink Command Line Entry Point

This module wires the client together and exposes the dashboard actions
on the command line:

    tinylink list [--search QUERY]
    tinylink create URL [--code CODE]
    tinylink delete CODE [--yes]
    tinylink stats CODE
    tinylink copy CODE

Design Decisions:
- Settings come from the environment (TINYLINK_*), --api-base overrides
- Commands drive the same controllers a graphical front-end would use
- Exit status is 0 on success, 1 on any failure outcome
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence, TextIO

from tinylink import __version__
from tinylink.api.client import LinkApiClient
from tinylink.core.display import LinkRow, format_timestamp
from tinylink.core.setting import Settings, get_settings
from tinylink.services.dashboard import DashboardController
from tinylink.services.link_repository import LinkRepository
from tinylink.services.prompt import ConsolePrompt, UserPrompt
from tinylink.services.stats import StatsController, StatsStatus

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "There is no link yet. Add a new link with 'tinylink create'."
TABLE_COLUMNS = ("Short code", "Short URL", "Target URL", "Total clicks", "Last clicked", "Created at")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinylink",
        description="Manage TinyLink short URLs",
    )
    parser.add_argument("--api-base", help="API base address (overrides TINYLINK_API_BASE)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List links")
    list_parser.add_argument("--search", default="", help="Filter by code or URL (case-insensitive)")

    create_parser = subparsers.add_parser("create", help="Create a short link")
    create_parser.add_argument("url", help="Long URL to shorten")
    create_parser.add_argument("--code", default="", help="Custom code (6-8 chars, A-Z, a-z, 0-9)")

    delete_parser = subparsers.add_parser("delete", help="Delete a short link")
    delete_parser.add_argument("code")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")

    stats_parser = subparsers.add_parser("stats", help="Show click stats for a code")
    stats_parser.add_argument("code")

    copy_parser = subparsers.add_parser("copy", help="Copy a short URL to the clipboard")
    copy_parser.add_argument("code")

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def render_table(rows: Sequence[LinkRow], out: TextIO) -> None:
    """Print rows as a plain aligned table."""
    cells = [TABLE_COLUMNS] + [
        (row.code, row.short_url, row.target_url, str(row.total_clicks), row.last_clicked, row.created_at)
        for row in rows
    ]
    widths = [max(len(line[i]) for line in cells) for i in range(len(TABLE_COLUMNS))]
    for line in cells:
        print("  ".join(value.ljust(width) for value, width in zip(line, widths)).rstrip(), file=out)


async def cmd_list(repository: LinkRepository, prompt: UserPrompt, args, out: TextIO) -> int:
    dashboard = DashboardController(repository, prompt)
    await dashboard.mount()
    state = dashboard.state

    if state.links_error:
        print(state.links_error, file=out)
        return 1

    dashboard.set_search(args.search)
    links = dashboard.filtered_links
    if not links:
        print(EMPTY_LIST_MESSAGE, file=out)
        return 0

    render_table([LinkRow.from_record(link, repository.base_address) for link in links], out)
    return 0


async def cmd_create(repository: LinkRepository, prompt: UserPrompt, args, out: TextIO) -> int:
    dashboard = DashboardController(repository, prompt)
    dashboard.set_url(args.url)
    dashboard.set_code(args.code)

    result = await dashboard.create()
    if not result.ok:
        print(dashboard.state.form_error, file=out)
        return 1

    print(dashboard.state.form_success, file=out)
    print(repository.short_url(result.value.code), file=out)
    return 0


async def cmd_delete(repository: LinkRepository, prompt: UserPrompt, args, out: TextIO) -> int:
    dashboard = DashboardController(repository, prompt)
    result = await dashboard.delete(args.code)
    if result is None:
        print("Cancelled.", file=out)
        return 1
    if not result.ok:
        return 1

    print(f"Deleted {args.code}.", file=out)
    return 0


async def cmd_stats(repository: LinkRepository, prompt: UserPrompt, args, out: TextIO) -> int:
    stats = StatsController(repository)
    state = await stats.show(args.code)

    print(f"Stats for {args.code}", file=out)
    if state.status is not StatsStatus.LOADED:
        print(state.error, file=out)
        return 1

    link = state.link
    print(f"Short URL:     {state.short_url}", file=out)
    print(f"Target URL:    {link.target_url}", file=out)
    print(f"Total clicks:  {link.total_clicks}", file=out)
    print(f"Last clicked:  {format_timestamp(link.last_clicked_at)}", file=out)
    print(f"Created at:    {format_timestamp(link.created_at)}", file=out)
    return 0


async def cmd_copy(repository: LinkRepository, prompt: UserPrompt, args, out: TextIO) -> int:
    dashboard = DashboardController(repository, prompt)
    return 0 if dashboard.copy_short_url(args.code) else 1


COMMANDS = {
    "list": cmd_list,
    "create": cmd_create,
    "delete": cmd_delete,
    "stats": cmd_stats,
    "copy": cmd_copy,
}


async def run(
    args: argparse.Namespace,
    settings: Settings,
    prompt: Optional[UserPrompt] = None,
    out: Optional[TextIO] = None,
    client: Optional[LinkApiClient] = None,
) -> int:
    """
    Run one parsed command.

    Args:
        args: Parsed command line
        settings: Client settings
        prompt: User prompt (ConsolePrompt when omitted)
        out: Output stream (stdout when omitted)
        client: Prebuilt API client (built from settings when omitted)

    Returns:
        Process exit status
    """
    out = out or sys.stdout
    prompt = prompt or ConsolePrompt(output=out, assume_yes=getattr(args, "yes", False))
    client = client or LinkApiClient(settings.API_BASE, timeout=settings.REQUEST_TIMEOUT)

    async with client:
        repository = LinkRepository(client)
        return await COMMANDS[args.command](repository, prompt, args, out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {"API_BASE": args.api_base} if args.api_base else {}
    settings = get_settings(**overrides)
    configure_logging("DEBUG" if args.verbose else settings.LOG_LEVEL)
    logger.debug(f"Using API at {settings.API_BASE}")

    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
