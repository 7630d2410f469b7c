"""Command-line interface for http-cli."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .core.exchange import RequestExchange
from .core.normalizer import normalize
from .exceptions import ConfigError
from .http.client import AsyncHttpClient
from .logging_config import setup_logging
from .models.config import DisplayConfig, HttpMethod, default_config_home
from .output.renderer import ResponseRenderer
from .output.style import OutputStyle

logger = logging.getLogger(__name__)

COMMANDS = [method.value.lower() for method in HttpMethod]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="http-cli",
        description="Send an HTTP request and render the response",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  get|post|put|delete|patch|head <url>   Send a request with that method

Examples:
  # Fetch JSON and show it with response headers
  http-cli get api.example.com/users -v

  # Send properties-style data (sent as JSON)
  http-cli post api.example.com/users -d 'name=alice'

  # Upload a file as multipart/form-data
  http-cli post api.example.com/upload -D report.pdf

  # Save the response body and keep cookies between calls
  http-cli get example.com/archive.zip -o archive.zip -c cookies.txt
        """,
    )

    parser.add_argument(
        "command",
        metavar="command",
        help="HTTP method: " + ", ".join(COMMANDS),
    )
    parser.add_argument(
        "url",
        nargs="?",
        help="Target URL (https:// is assumed when no scheme is given)",
    )

    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Request
    request_group = parser.add_argument_group("request")
    request_group.add_argument(
        "--header",
        "-H",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a header (repeatable)",
    )
    request_group.add_argument(
        "--data",
        "-d",
        nargs="?",
        const="",
        default=None,
        help="Content of request: JSON, or key=value lines",
    )
    request_group.add_argument(
        "--datafile",
        "-D",
        type=Path,
        metavar="FILE",
        help="Send a file as multipart/form-data",
    )
    request_group.add_argument(
        "--type",
        "-t",
        metavar="CONTENT_TYPE",
        help="Content type of --data (json, text, xml, or a MIME type)",
    )
    request_group.add_argument(
        "--proxy",
        "-p",
        metavar="URL",
        help="Proxy (format: http(s)://[username:password@]proxyhost:proxyport)",
    )
    request_group.add_argument(
        "--cookie",
        "-c",
        type=Path,
        metavar="FILE",
        help="Cookie file",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--output",
        "-o",
        type=Path,
        metavar="FILE",
        help="Save response to a file",
    )
    output_group.add_argument(
        "--yaml",
        "-y",
        action="store_true",
        help="Render JSON data in a colored YAML style",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose mode",
    )
    output_group.add_argument(
        "--no-color",
        action="store_true",
        help="Monochrome display",
    )
    output_group.add_argument(
        "--log-file",
        type=Path,
        metavar="FILE",
        help="Also write log records to this file",
    )

    return parser


def run_request(args: argparse.Namespace) -> int:
    """Send the request described by parsed arguments."""
    display = DisplayConfig(verbose=args.verbose, color=not args.no_color, yaml=args.yaml)
    style = OutputStyle(color=display.color)
    console = style.make_console()
    setup_logging(
        "DEBUG" if display.verbose else "INFO",
        console=console,
        style=style,
        log_file=str(args.log_file) if args.log_file else None,
        force=True,
    )
    renderer = ResponseRenderer(console, style, verbose=display.verbose, yaml=display.yaml)
    logger.debug(f"Config home: {default_config_home()}")

    async def run() -> int:
        try:
            config = await normalize(
                args.command,
                args.url,
                headers=args.header,
                data=args.data,
                datafile=args.datafile,
                content_type=args.type,
                proxy=args.proxy,
                cookie_file=args.cookie,
                output_file=args.output,
            )
        except ConfigError as e:
            renderer.error(f"Error: {e}")
            return 1

        spinner = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        )
        spinner.add_task(f"{config.method.value} {config.url}", total=None)

        try:
            async with AsyncHttpClient() as transport:
                exchange = RequestExchange(config, transport, renderer, spinner)
                return await exchange.run()
        except Exception as e:
            renderer.error(f"Error: {e}")
            if display.verbose:
                console.print_exception()
            return 1

    return asyncio.run(run())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command.lower() not in COMMANDS:
        print(
            f"Invalid command: {args.command}\nSee --help for a list of available commands.",
            file=sys.stderr,
        )
        return 1

    if not args.url:
        parser.error("the following arguments are required: url")

    return run_request(args)


if __name__ == "__main__":
    sys.exit(main())
