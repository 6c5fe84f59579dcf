"""Command-line interface for tierlist."""

import argparse
import sys
from dataclasses import dataclass

from api import HttpTierListClient, SessionManager
from app import TierListApp
from settings import Settings, load_settings
from sharelink import ShareLink, parse_share_link

TIERLIST_VERSION = "0.1.0"


@dataclass
class ParsedArgs:
    """Parsed command-line arguments."""

    api_url: str | None
    storage_url: str | None
    token: str | None
    share_link: ShareLink | None


def print_error_box(title: str, *lines: str) -> None:
    """Print a formatted error box to stderr.

    Args:
        title: The error title (will be prefixed with "Error: ")
        *lines: Additional lines to print in the box
    """
    print("=" * 60, file=sys.stderr)
    print(f"Error: {title}", file=sys.stderr)
    print("", file=sys.stderr)
    for line in lines:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


class TierListHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that shows our structured help."""

    def format_help(self) -> str:
        lines = [
            "Tier List - rank a template's items into tiers from the terminal.",
            f"Version: {TIERLIST_VERSION}",
            "",
            "Core:",
            "  tierlist                              Open the board",
            "  tierlist --link <url>                 Open a shared list link",
            "  tierlist --template-id <id>           Open a template directly",
            "  tierlist --template-id <id> --load-list-id <id>",
            "                                        Open a saved list of a template",
            "",
            "Connection:",
            "  tierlist --api-url <url>              API server (env: TIERLIST_API_URL)",
            "  tierlist --storage-url <url>          Storage server for image uploads",
            "                                        (env: TIERLIST_STORAGE_URL)",
            "  tierlist --token <jwt>                Access token for this run",
            "                                        (env: TIERLIST_ACCESS_TOKEN)",
            "",
            "Options:",
            "  -h, --help                            Show this help",
            "  --version                             Show version",
            "",
            "Keys:",
            "  t templates, n new template, s save, l saved lists, q quit",
            "  On a focused item: 1-9 send to tier, 0 send to bank,",
            "  shift+left/right reorder, drag with the mouse, esc cancels a drag",
        ]
        return "\n".join(lines) + "\n"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for tierlist CLI."""
    parser = argparse.ArgumentParser(
        prog="tierlist",
        formatter_class=TierListHelpFormatter,
        add_help=True,
    )

    parser.add_argument("--version", action="store_true", help=argparse.SUPPRESS)

    # Connection
    parser.add_argument("--api-url", metavar="URL", help=argparse.SUPPRESS)
    parser.add_argument("--storage-url", metavar="URL", help=argparse.SUPPRESS)
    parser.add_argument("--token", metavar="JWT", help=argparse.SUPPRESS)

    # What to open
    parser.add_argument("--link", metavar="URL", help=argparse.SUPPRESS)
    parser.add_argument("--template-id", metavar="ID", help=argparse.SUPPRESS)
    parser.add_argument("--load-list-id", metavar="ID", help=argparse.SUPPRESS)

    return parser


def parse_args(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command line arguments.

    Returns:
        ParsedArgs with connection overrides and the link to open, if any.
    """
    parser = create_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.version:
        print(f"tierlist {TIERLIST_VERSION}")
        sys.exit(0)

    share_link = None
    if args.link:
        if args.template_id or args.load_list_id:
            print_error_box(
                "--link cannot be combined with --template-id or --load-list-id",
            )
            sys.exit(1)
        share_link = parse_share_link(args.link)
        if share_link is None:
            print_error_box(
                "Link has no template_id",
                f"Got: {args.link}",
                "Expected something like: https://host/?template_id=...&load_list_id=...",
            )
            sys.exit(1)
    elif args.load_list_id and not args.template_id:
        print_error_box("--load-list-id requires --template-id")
        sys.exit(1)
    elif args.template_id:
        share_link = ShareLink(args.template_id, args.load_list_id)

    return ParsedArgs(
        api_url=args.api_url,
        storage_url=args.storage_url,
        token=args.token,
        share_link=share_link,
    )


def build_settings(args: ParsedArgs, base: Settings | None = None) -> Settings:
    """Apply command-line overrides on top of environment settings."""
    settings = base if base is not None else load_settings()
    return settings.with_overrides(
        api_url=args.api_url.rstrip("/") if args.api_url else None,
        storage_url=args.storage_url.rstrip("/") if args.storage_url else None,
        access_token=args.token,
    )


def main() -> None:
    """Main entry point."""
    args = parse_args()
    settings = build_settings(args)

    sessions = SessionManager(settings.session_path, settings.access_token)
    client = HttpTierListClient(settings, sessions)
    app = TierListApp(client, sessions, settings=settings, share_link=args.share_link)
    app.run()


if __name__ == "__main__":
    main()
