"""Command-line interface for httpapi."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .core.api import HttpApi
from .core.uri import with_query
from .exceptions import InvalidTargetError
from .http.decoders import as_json, as_text
from .http.protocols import HttpResponse
from .logging_config import setup_logging
from .models.config import HttpApiConfig
from .models.request import HttpRequest


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key, value


def _header(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected 'Name: value', got {raw!r}")
    return name.strip(), value.strip()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="httpapi",
        description="Send a pre-configured HTTP request and print the response",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # GET a JSON document
  httpapi json https://api.example.com/items -p page=2

  # GET plain text with an extra header
  httpapi text https://example.com/hello.txt -H "Authorization: Bearer TOKEN"

  # POST a file as the request body
  httpapi post https://example.com/upload --data-file image.png
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "kind",
        choices=["json", "text", "post"],
        help="Request shape: JSON GET, plain-text GET, or binary POST",
    )
    parser.add_argument("url", help="Target URL")

    request_group = parser.add_argument_group("request settings")
    request_group.add_argument(
        "--header",
        "-H",
        dest="headers",
        action="append",
        type=_header,
        default=[],
        metavar="'NAME: VALUE'",
        help="Additional header (repeatable)",
    )
    request_group.add_argument(
        "--param",
        "-p",
        dest="params",
        action="append",
        type=_key_value,
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter appended to the URL (repeatable)",
    )
    request_group.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="File whose bytes are POSTed (post only; empty body if omitted)",
    )
    request_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: 60)",
    )
    request_group.add_argument(
        "--user-agent",
        default=None,
        help="Override the default User-Agent",
    )
    request_group.add_argument(
        "--no-redirects",
        action="store_true",
        help="Do not follow redirects",
    )
    request_group.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Send through the asynchronous transport",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser


def build_config(args: argparse.Namespace) -> HttpApiConfig:
    """Merge the YAML config file (if any) with command-line overrides."""
    data: dict[str, Any] = {}
    if args.config:
        data = HttpApiConfig.from_yaml_file(args.config).model_dump(exclude_unset=True)

    if args.timeout is not None:
        data["timeout"] = args.timeout
    if args.user_agent:
        data["user_agent"] = args.user_agent
    if args.no_redirects:
        data["follow_redirects"] = False
    if args.log_level:
        data["log_level"] = args.log_level

    return HttpApiConfig(**data)


def build_request(api: HttpApi, args: argparse.Namespace) -> HttpRequest:
    """Build the request described by the parsed arguments."""
    url = with_query(args.url, dict(args.params)) if args.params else args.url

    if args.kind == "json":
        return api.json_request(url, args.headers)
    if args.kind == "text":
        return api.plain_request(url, args.headers)
    if args.data_file is not None:
        return api.post_bytes(url, args.data_file.read_bytes(), args.headers)
    return api.post_plain(url, args.headers)


async def _send_async(api: HttpApi, request: HttpRequest, decoder: Any) -> Optional[HttpResponse[Any]]:
    async with api:
        task = api.send_async(request, decoder)
        if task is None:
            return None
        try:
            return await task
        except Exception as e:
            api.logger.error("An error occurred while interacting with %s", request.uri, exc_info=e)
            return None


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    console = Console()
    err_console = Console(stderr=True)

    try:
        config = build_config(args)
    except (ValidationError, OSError) as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 2

    logger = setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
    )

    api = HttpApi(logger=logger.getChild("cli"), config=config)
    try:
        request = build_request(api, args)
    except (InvalidTargetError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        api.close()
        return 2

    decoder = as_json if args.kind == "json" else as_text

    if args.use_async:
        response = asyncio.run(_send_async(api, request, decoder))
    else:
        with api:
            response = api.send_sync(request, decoder)

    if response is None:
        err_console.print(f"[red]No response from[/red] {escape(request.uri)}")
        return 1

    err_console.print(f"[bold]{response.status_code}[/bold] {escape(response.url)}", highlight=False)
    if args.kind == "json":
        console.print_json(data=response.body)
    else:
        console.out(response.body, highlight=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
