# cli/cli.py
"""
CLI registry and dispatcher for the demo-form pipeline.
"""
from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import Callable, Dict, Optional

import httpx

from leadcapture.core.logging import configure_structlog
from leadcapture.services.attribution import DictStorage, JsonFileStorage
from leadcapture.services.email_validation import EmailVerificationClient
from leadcapture.services.error_display import ElementStateView
from leadcapture.services.ip_lookup import get_ip_address
from leadcapture.services.submission import PageContext, SubmissionState, SubmitEvent, load_form


# Output formatting utilities
def _supports_color() -> bool:
    """Check if terminal supports ANSI color codes."""
    if sys.platform == "win32":
        return os.getenv("TERM") == "xterm" or os.getenv("ANSICON") is not None
    return sys.stdout.isatty()


SUPPORTS_COLOR = _supports_color()

GREEN = '\033[92m' if SUPPORTS_COLOR else ''
RED = '\033[91m' if SUPPORTS_COLOR else ''
YELLOW = '\033[93m' if SUPPORTS_COLOR else ''
BLUE = '\033[94m' if SUPPORTS_COLOR else ''
RESET = '\033[0m' if SUPPORTS_COLOR else ''


def print_success(message: str):
    print(f"{GREEN}[✓]{RESET} {message}")


def print_error(message: str):
    print(f"{RED}[✗]{RESET} {message}")


def print_warning(message: str):
    print(f"{YELLOW}[!]{RESET} {message}")


def print_info(message: str):
    print(f"{BLUE}[i]{RESET} {message}")


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


# Command functions
async def cmd_check_email(args: argparse.Namespace) -> int:
    """Command: Run the verification step for one address."""
    print_info(f"Verifying {args.email}...")
    async with _http_client() as client:
        result = await EmailVerificationClient(client).validate(args.email)

    if result.is_valid:
        print_success(f"{args.email}: {result.result}")
        return 0
    print_error(f"{args.email}: {result.result}")
    return 1


async def cmd_resolve_ip(args: argparse.Namespace) -> int:
    """Command: Resolve this machine's public IP."""
    async with _http_client() as client:
        ip_address = await get_ip_address(client)

    if ip_address:
        print_success(f"Public IP: {ip_address}")
        return 0
    print_warning("Public IP could not be resolved")
    return 1


async def cmd_submit(args: argparse.Namespace) -> int:
    """Command: Run a full submission as if the form had been submitted."""
    storage = JsonFileStorage(args.storage_file) if args.storage_file else DictStorage()
    view = ElementStateView()

    async with _http_client() as client:
        submitter = await load_form(
            view,
            client=client,
            cookies=lambda: args.cookie,
            storage=storage,
            page=PageContext(page_uri=args.page_uri, page_name=args.page_name),
        )
        outcome = await submitter.handle_submit(SubmitEvent({"email": args.email}))

    if outcome.state == SubmissionState.REDIRECTED:
        print_success(f"Submitted, redirecting to {outcome.redirect_url}")
        return 0

    if outcome.state == SubmissionState.REJECTED:
        print_error(f"Email rejected: {outcome.validation.result}")
        for name, visible in view.snapshot().model_dump().items():
            print_info(f"  {name}: {'shown' if visible else 'hidden'}")
    elif outcome.state == SubmissionState.ABORTED:
        print_error("Submission aborted: visitor token cookie not found")
    else:
        print_error("Submission failed (see logs)")
    return 1


# Command registry
COMMANDS: Dict[str, Callable] = {
    'check-email': cmd_check_email,
    'resolve-ip': cmd_resolve_ip,
    'submit': cmd_submit,
}


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        description='Demo-form pipeline CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    check_parser = subparsers.add_parser('check-email', help='Verify an email address')
    check_parser.add_argument('email', help='Address to verify')

    subparsers.add_parser('resolve-ip', help='Resolve the public IP address')

    submit_parser = subparsers.add_parser('submit', help='Submit the demo form')
    submit_parser.add_argument('--email', required=True, help='Email field value')
    submit_parser.add_argument(
        '--cookie',
        default=os.getenv('LEADCAPTURE_COOKIE', ''),
        help='Raw cookie string, e.g. "hubspotutk=abc; other=1"',
    )
    submit_parser.add_argument('--storage-file', default=None, help='JSON file holding persisted page storage')
    submit_parser.add_argument('--page-uri', required=True, help='URL of the page hosting the form')
    submit_parser.add_argument('--page-name', default='', help='Title of the page hosting the form')

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()

    if args is None:
        parsed_args = parser.parse_args()
    else:
        parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    command_func = COMMANDS.get(parsed_args.command)
    if not command_func:
        print_error(f"Unknown command: {parsed_args.command}")
        parser.print_help()
        return 1

    configure_structlog()

    try:
        return asyncio.run(command_func(parsed_args))
    except KeyboardInterrupt:
        print_error("\nInterrupted by user")
        return 130


if __name__ == '__main__':
    sys.exit(main())
