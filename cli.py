#!/usr/bin/env python3
"""
Command-line interface for the account opening workflow.

Usage:
    uv run python cli.py [command] [options]

Commands:
    demo        Run demo scenarios
    open        Open an account for one applicant
    test        Run the test suite
    serve       Start the API server

Examples:
    uv run python cli.py demo opened
    uv run python cli.py demo all
    uv run python cli.py open John Smith 123XYZ9 1990-01-01
    uv run python cli.py serve --reload
"""

import argparse
import logging
import subprocess
import sys
from datetime import date

from shared.config import get_settings

DEMO_SCENARIOS = ["opened", "declined", "no-record", "failure", "all"]


def run_demo(scenario: str) -> None:
    """Run a demo scenario."""
    from account_opening import demo

    scenarios = {
        "opened": demo.run_opened_demo,
        "declined": demo.run_declined_demo,
        "no-record": demo.run_no_record_demo,
        "failure": demo.run_failure_demo,
        "all": demo.run_all_demos,
    }
    scenarios[scenario]()


def run_open(first_name: str, last_name: str, tax_id: str, dob: date) -> int:
    """Open one account with the configured simulated collaborators."""
    from account_opening.factory import create_account_opening_service
    from shared.errors import CollaboratorError

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
        datefmt="%H:%M:%S",
    )

    service = create_account_opening_service()
    try:
        status = service.open_account(first_name, last_name, tax_id, dob)
    except CollaboratorError as e:
        print(f"Outcome indeterminate, {type(e).__name__}: {e}")
        return 2

    print(status.value)
    return 0


def run_tests(args: list[str]) -> None:
    """Run the test suite."""
    cmd = ["uv", "run", "pytest"] + args
    subprocess.run(cmd)


def run_server(host: str, port: int, reload: bool) -> None:
    """Start the API server."""
    cmd = ["uv", "run", "uvicorn", "api.main:app", f"--host={host}", f"--port={port}"]
    if reload:
        cmd.append("--reload")

    print(f"Starting server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    subprocess.run(cmd)


def main() -> None:
    """Main CLI entry point."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Account Opening CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo opened
  %(prog)s demo all
  %(prog)s open John Smith 123XYZ9 1990-01-01
  %(prog)s test -v
  %(prog)s serve --reload
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demo scenarios")
    demo_parser.add_argument("scenario", choices=DEMO_SCENARIOS, help="Which scenario to run")

    # Open command
    open_parser = subparsers.add_parser("open", help="Open an account for one applicant")
    open_parser.add_argument("first_name")
    open_parser.add_argument("last_name")
    open_parser.add_argument("tax_id")
    open_parser.add_argument("dob", type=date.fromisoformat, help="Date of birth, YYYY-MM-DD")

    # Test command
    test_parser = subparsers.add_parser("test", help="Run the test suite")
    test_parser.add_argument(
        "pytest_args",
        nargs="*",
        default=[],
        help="Arguments to pass to pytest",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default=settings.http_host, help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=settings.http_port, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    if args.command == "demo":
        run_demo(args.scenario)
    elif args.command == "open":
        sys.exit(run_open(args.first_name, args.last_name, args.tax_id, args.dob))
    elif args.command == "test":
        run_tests(args.pytest_args)
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
