"""
Naming for the screenshots, videos and traces captured by tests
"""
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from playwright_tests.fixture.enums import OperatingSystem


def operating_system_tag(platform: Optional[str] = None) -> str:
    """Normalize the host platform to the name used in artifact file names"""
    platform = platform or sys.platform

    if platform.startswith("linux"):
        return OperatingSystem.LINUX.value
    if platform == "darwin":
        return OperatingSystem.MACOS.value
    if platform in ("win32", "cygwin"):
        return OperatingSystem.WINDOWS.value
    return OperatingSystem.OTHER.value


def generate_file_name(
    test_name: str,
    browser_type: str,
    browser_channel: Optional[str],
    extension: str,
    now: Optional[datetime] = None,
    platform: Optional[str] = None,
) -> str:
    """
    Generate a file name for an artifact of a test run.

    The name combines the test name, browser, host operating system and the
    current UTC time to the second, e.g.
    ``search_chromium_msedge_linux_2024-01-31-12-00-00.png``.
    """
    if browser_channel:
        browser_type = f"{browser_type}_{browser_channel}"

    now = now or datetime.now(timezone.utc)
    timestamp = now.astimezone(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S")

    return f"{test_name}_{browser_type}_{operating_system_tag(platform)}_{timestamp}{extension}"


def artifact_path(directory: str, file_name: str) -> str:
    return os.path.join(directory, file_name)
