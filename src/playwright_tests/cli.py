#!/usr/bin/env python
"""
Command-line tool for the Playwright tests

Installs the browsers the tests need and reports BrowserStack availability.
"""
import argparse
import json
import subprocess
import sys
from typing import List, Optional

from loguru import logger

from playwright_tests.browsers import browserstack_credentials
from playwright_tests.browserstack.client import BrowserStackAutomateClient, BrowserStackError


def install_browsers(browsers: Optional[List[str]] = None, with_deps: bool = False) -> int:
    """Install the Playwright browsers, returning the exit code of the installer"""
    command = [sys.executable, "-m", "playwright", "install"]
    if with_deps:
        command.append("--with-deps")
    command.extend(browsers or [])

    logger.info(f"Installing browsers: {' '.join(browsers) if browsers else 'all'}")
    result = subprocess.run(command, check=False)

    if result.returncode != 0:
        logger.error(f"Playwright exited with code {result.returncode}")

    return result.returncode


def browserstack_status() -> int:
    """Print the status of the BrowserStack Automate plan"""
    credentials = browserstack_credentials()
    if credentials is None:
        logger.error("BROWSERSTACK_USERNAME and BROWSERSTACK_TOKEN must be set")
        return 1

    try:
        with BrowserStackAutomateClient(credentials.user_name, credentials.access_key) as client:
            status = client.get_status()
    except BrowserStackError as e:
        logger.error(f"Failed to get BrowserStack status: {e}")
        return 1

    print(json.dumps(status.model_dump(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI"""
    parser = argparse.ArgumentParser(description="Playwright tests")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # install command
    install_parser = subparsers.add_parser("install", help="Install the browsers used by the tests")
    install_parser.add_argument("browsers", nargs="*", help="Browsers to install, all if none are given")
    install_parser.add_argument("--with-deps", action="store_true", help="Also install system dependencies")

    # status command
    subparsers.add_parser("status", help="Show the BrowserStack Automate plan status")

    args = parser.parse_args(argv)

    if args.debug:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")

    if args.command == "install":
        return install_browsers(args.browsers, args.with_deps)

    elif args.command == "status":
        return browserstack_status()

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
