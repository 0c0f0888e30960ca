"""
The browsers to run the tests against.

Locally this depends on the browsers available for the host operating system.
With BrowserStack every browser is available.
"""
import sys
from typing import List, Optional, Tuple

from loguru import logger

from playwright_tests.browserstack.client import BrowserStackAutomateClient, BrowserStackError
from playwright_tests.core import settings
from playwright_tests.fixture.enums import BrowserChannel, BrowserType
from playwright_tests.fixture.options import BrowserStackCredentials


def browserstack_credentials() -> Optional[BrowserStackCredentials]:
    """Get the BrowserStack credentials, if both are configured"""
    if not settings.BROWSERSTACK_USERNAME or not settings.BROWSERSTACK_TOKEN:
        return None

    return BrowserStackCredentials(
        user_name=settings.BROWSERSTACK_USERNAME,
        access_key=settings.BROWSERSTACK_TOKEN,
    )


def browsers_test_data(
    use_browserstack: Optional[bool] = None,
    platform: Optional[str] = None,
) -> List[Tuple[str, Optional[str]]]:
    """Get the (browser type, channel) pairs to run tests with"""
    if use_browserstack is None:
        use_browserstack = browserstack_credentials() is not None

    is_windows = (platform or sys.platform) == "win32"

    browsers: List[Tuple[str, Optional[str]]] = [(BrowserType.CHROMIUM.value, None)]

    if use_browserstack or not is_windows:
        browsers.append((BrowserType.CHROMIUM.value, BrowserChannel.CHROME.value))

    if use_browserstack or is_windows:
        browsers.append((BrowserType.CHROMIUM.value, BrowserChannel.MSEDGE.value))

    browsers.append((BrowserType.FIREFOX.value, None))

    return browsers


def use_browserstack(client: Optional[BrowserStackAutomateClient] = None) -> bool:
    """
    Whether tests should run on BrowserStack.

    Requires credentials and a free parallel session on the Automate plan.
    """
    credentials = browserstack_credentials()
    if credentials is None:
        return False

    owns_client = client is None
    if owns_client:
        client = BrowserStackAutomateClient(credentials.user_name, credentials.access_key)

    try:
        status = client.get_status()
    except BrowserStackError as e:
        logger.warning(f"Not using BrowserStack, failed to get the plan status: {e}")
        return False
    finally:
        if owns_client:
            client.close()

    if not status.has_capacity:
        logger.info(
            f"Not using BrowserStack, {status.parallel_sessions_running} of "
            f"{status.parallel_sessions_max_allowed} parallel sessions in use"
        )
        return False

    return True
