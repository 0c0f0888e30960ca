"""
Live search tests, run against real browsers locally or on BrowserStack.
"""
import pytest

from playwright_tests.browsers import browsers_test_data, browserstack_credentials, use_browserstack
from playwright_tests.cli import install_browsers
from playwright_tests.core import settings
from playwright_tests.fixture.browser import BrowserFixture
from playwright_tests.fixture.options import BrowserFixtureOptions
from playwright_tests.scenarios import search_for_dotnet_core

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.skipif(not settings.RUN_E2E, reason="Set PLAYWRIGHT_TESTS_RUN_E2E=true to run live browser tests"),
]


@pytest.fixture(scope="module", autouse=True)
def installed_browsers():
    """Install the browsers before any test runs"""
    exit_code = install_browsers()
    if exit_code != 0:
        raise RuntimeError(f"Playwright exited with code {exit_code}.")


@pytest.mark.asyncio
@pytest.mark.parametrize("browser_type, browser_channel", browsers_test_data())
async def test_search_for_dotnet_core(browser_type, browser_channel):
    """Search for .NET Core and click through to a result"""
    remote = use_browserstack()

    options = BrowserFixtureOptions(
        browser_type=browser_type,
        browser_channel=browser_channel,
        use_browserstack=remote,
        browserstack_credentials=browserstack_credentials() if remote else None,
    )

    await BrowserFixture(options).with_page(search_for_dotnet_core)
