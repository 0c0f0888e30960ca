"""
Base test fixtures for all tests
"""
import pytest
from unittest.mock import MagicMock, AsyncMock, patch
from types import SimpleNamespace


class FakePlaywright:
    """
    A mock of the Playwright driver, browser, context and page chain.

    Every call that acquires or releases a resource is appended to ``events``
    so tests can assert on ordering.
    """

    def __init__(self):
        self.events = []

        self.video = MagicMock()
        self.video.save_as = AsyncMock(side_effect=self._record("video.save_as"))

        self.page = MagicMock()
        self.page.screenshot = AsyncMock(side_effect=self._record("page.screenshot"))
        self.page.evaluate = AsyncMock(side_effect=self._record("page.evaluate"))
        self.page.close = AsyncMock(side_effect=self._record("page.close"))
        self.page.video = self.video
        self.page.goto = AsyncMock()
        self.page.fill = AsyncMock()

        self.context = MagicMock()
        self.context.new_page = AsyncMock(side_effect=self._record("context.new_page", self.page))
        self.context.close = AsyncMock(side_effect=self._record("context.close"))
        self.context.tracing.start = AsyncMock(side_effect=self._record("tracing.start"))
        self.context.tracing.stop = AsyncMock(side_effect=self._record("tracing.stop"))

        self.browser = MagicMock()
        self.browser.new_context = AsyncMock(side_effect=self._record("browser.new_context", self.context))
        self.browser.close = AsyncMock(side_effect=self._record("browser.close"))

        self.playwright = MagicMock()
        self.playwright.stop = AsyncMock(side_effect=self._record("playwright.stop"))
        for name in ("chromium", "firefox", "webkit"):
            browser_type = getattr(self.playwright, name)
            browser_type.launch = AsyncMock(side_effect=self._record(f"{name}.launch", self.browser))
            browser_type.connect = AsyncMock(side_effect=self._record(f"{name}.connect", self.browser))

        self.async_playwright = MagicMock()
        self.async_playwright.return_value.start = AsyncMock(
            side_effect=self._record("playwright.start", self.playwright)
        )

    def _record(self, name, result=None):
        def side_effect(*args, **kwargs):
            self.events.append(name)
            return result
        return side_effect

    def handlers(self, event):
        """Get the handlers registered on the page for an event"""
        return [c.args[1] for c in self.page.on.call_args_list if c.args[0] == event]

    def count(self, name):
        return self.events.count(name)


@pytest.fixture
def fake_playwright():
    """Patch the fixture to use a fake Playwright driver"""
    fake = FakePlaywright()
    with patch("playwright_tests.fixture.browser.async_playwright", fake.async_playwright):
        yield fake


@pytest.fixture
def output():
    """An output sink that records what was written to it"""
    lines = []
    return SimpleNamespace(lines=lines, write=lines.append)


@pytest.fixture
def patch_settings(monkeypatch):
    """Patch settings values for the duration of a test"""
    def patch_values(**values):
        for name, value in values.items():
            monkeypatch.setattr(f"playwright_tests.core.settings.{name}", value)

    return patch_values
