"""
Capabilities sent to BrowserStack when connecting a Playwright browser.

Supported capabilities and operating systems are documented at:
https://www.browserstack.com/automate/capabilities
https://www.browserstack.com/list-of-browsers-and-platforms/playwright
"""
import json
import os
from importlib.metadata import version
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from playwright_tests.core import settings
from playwright_tests.fixture.enums import BrowserChannel
from playwright_tests.fixture.options import BrowserFixtureOptions

# Playwright channel names that BrowserStack knows by another name
CHANNEL_ALIASES = {
    BrowserChannel.MSEDGE.value: "edge",
}


def grid_browser_name(browser_type: str, browser_channel: Optional[str]) -> str:
    """
    Map a Playwright browser to the BrowserStack browser name.

    Allowed browsers are "chrome", "edge", "playwright-chromium",
    "playwright-firefox" and "playwright-webkit".
    """
    if browser_channel:
        return CHANNEL_ALIASES.get(browser_channel, browser_channel)
    return f"playwright-{browser_type}"


def default_build() -> str:
    """Build label for the session, the GitHub Actions run number if available"""
    build = os.environ.get("GITHUB_RUN_NUMBER")
    if build:
        return build

    from playwright_tests import __version__
    return __version__


def default_project() -> str:
    """Project label for the session, the GitHub repository name if available"""
    repository = os.environ.get("GITHUB_REPOSITORY")
    if repository and "/" in repository:
        return repository.split("/")[1]
    return settings.DEFAULT_PROJECT_NAME


def default_playwright_version() -> str:
    """Version of the installed Playwright package"""
    return version("playwright")


def build_capabilities(options: BrowserFixtureOptions, test_name: str) -> Dict[str, Optional[str]]:
    """Build the capabilities for a session from the fixture options"""
    credentials = options.browserstack_credentials
    if credentials is None:
        raise ValueError("BrowserStack credentials are required to build capabilities")

    return {
        "browser": grid_browser_name(options.browser_type, options.browser_channel),
        "browserstack.accessKey": credentials.access_key,
        "browserstack.username": credentials.user_name,
        "build": options.build or default_build(),
        "client.playwrightVersion": options.playwright_version or default_playwright_version(),
        "name": test_name,
        "os": options.operating_system,
        "os_version": options.operating_system_version,
        "project": options.project_name or default_project(),
    }


def build_ws_endpoint(endpoint: str, capabilities: Dict[str, Optional[str]]) -> str:
    """Add the capabilities as JSON to the endpoint in the "caps" query string parameter"""
    caps = json.dumps(capabilities, separators=(",", ":"))

    parts = urlsplit(endpoint)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.append(("caps", caps))

    return urlunsplit(parts._replace(query=urlencode(query)))
