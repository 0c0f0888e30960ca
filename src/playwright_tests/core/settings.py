import os
import sys


# BrowserStack Automate configuration
# Both values must be set for tests to run against BrowserStack
BROWSERSTACK_USERNAME = os.environ.get("BROWSERSTACK_USERNAME") or None
BROWSERSTACK_TOKEN = os.environ.get("BROWSERSTACK_TOKEN") or None
BROWSERSTACK_ENDPOINT = os.environ.get("BROWSERSTACK_ENDPOINT", "wss://cdp.browserstack.com/playwright")
BROWSERSTACK_API_URL = os.environ.get("BROWSERSTACK_API_URL", "https://api.browserstack.com")

# CI configuration
GITHUB_ACTIONS = bool(os.environ.get("GITHUB_ACTIONS"))

# Diagnostics captured for each test
CAPTURE_TRACE = os.environ.get("PLAYWRIGHT_TESTS_CAPTURE_TRACE", "False").lower() in ("true", "1", "t")
CAPTURE_VIDEO = os.environ.get("PLAYWRIGHT_TESTS_CAPTURE_VIDEO", "False").lower() in ("true", "1", "t")

# Live browser tests hit real websites, so only run them in CI unless asked to
RUN_E2E = os.environ.get("PLAYWRIGHT_TESTS_RUN_E2E", str(GITHUB_ACTIONS)).lower() in ("true", "1", "t")

# Artifact locations, relative to the working directory
SCREENSHOTS_DIRECTORY = "screenshots"
TRACES_DIRECTORY = "traces"
VIDEOS_DIRECTORY = "videos"

DEFAULT_PROJECT_NAME = "python-playwright-tests"

# BrowserStack does not finalize a video until after the session ends
VIDEO_POLL_ATTEMPTS = 10
VIDEO_POLL_DELAY = 2

# Slow down operations so they can be followed when debugging interactively
DEBUG_SLOW_MO = 100


def is_debugger_attached() -> bool:
    """Whether a debugger (or any tracer) is attached to this process"""
    return sys.gettrace() is not None
