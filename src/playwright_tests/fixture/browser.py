"""
Fixture that runs a test against a fresh, isolated Playwright page.

The browser is either launched locally or, when configured, connected to
BrowserStack Automate. If the test fails a screenshot is captured, and a
trace and video are captured for every run when enabled. Every resource
acquired for the run is released in reverse order, whatever the outcome.
"""
import asyncio
import inspect
import tempfile
from contextlib import AsyncExitStack
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from playwright_tests.browserstack.capabilities import build_capabilities, build_ws_endpoint
from playwright_tests.browserstack.executor import NO_OP_SCRIPT, SESSION_DETAILS_ARG, parse_video_url, session_status_arg
from playwright_tests.browserstack.video import download_video
from playwright_tests.core import settings
from playwright_tests.fixture.artifacts import artifact_path, generate_file_name
from playwright_tests.fixture.enums import BrowserType, SessionStatus
from playwright_tests.fixture.options import BrowserFixtureOptions

PageAction = Callable[[Page], Awaitable[Any]]


def _caller_name(default: str = "test") -> str:
    """Name of the function that called into the fixture"""
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame and frame.f_back else None
        return caller.f_code.co_name if caller else default
    finally:
        del frame


class BrowserFixture:
    """Provides a Playwright page to a test"""

    def __init__(
        self,
        options: BrowserFixtureOptions,
        output: Optional[Callable[[str], Any]] = None,
    ):
        """
        Initialize the fixture.

        Args:
            options: How to obtain the browser and which diagnostics to capture
            output: Sink for browser console output and diagnostics messages
        """
        self.options = options
        self.output = output or logger.info

    async def with_page(self, action: PageAction, test_name: Optional[str] = None) -> None:
        """
        Run an action against a new page in a new browser.

        Args:
            action: The test to run, which is passed the page
            test_name: Name of the test, defaults to the name of the calling function

        Raises:
            Exception: Any error raised by the action, after diagnostics are captured
        """
        active_test_name = self.options.test_name or test_name or _caller_name()
        video_url = None

        async with AsyncExitStack() as stack:
            playwright = await async_playwright().start()
            stack.push_async_callback(playwright.stop)

            browser = await self.create_browser(playwright, active_test_name)
            stack.push_async_callback(browser.close)

            context = await browser.new_context(**self.create_context_options())
            stack.push_async_callback(context.close)

            # Tracing does not work over the BrowserStack connection
            tracing = self.options.capture_trace and not self.options.is_remote
            if tracing:
                await context.tracing.start(
                    screenshots=True,
                    snapshots=True,
                    sources=True,
                    title=active_test_name,
                )

            page = await context.new_page()

            # Capture output from the browser to the test logs
            page.on("console", lambda message: self.output(message.text))
            page.on("pageerror", lambda error: self.output(str(error)))

            try:
                await action(page)
                await self.try_set_session_status(page, SessionStatus.PASSED)
            except Exception as e:
                await self.try_capture_screenshot(page, active_test_name)
                await self.try_set_session_status(page, SessionStatus.FAILED, str(e))
                raise
            finally:
                if tracing:
                    await self.try_stop_trace(context, active_test_name)
                video_url = await self.try_capture_video(page, active_test_name)

        if video_url:
            # BrowserStack only makes the video available once the session has ended
            await self.try_capture_browserstack_video(video_url, active_test_name)

    def create_context_options(self) -> Dict[str, Any]:
        """Options for the browser context each test runs in"""
        options: Dict[str, Any] = {
            "locale": "en-GB",
            "timezone_id": "Europe/London",
        }

        if self.options.capture_video:
            options["record_video_dir"] = tempfile.gettempdir()

        return options

    async def create_browser(self, playwright: Playwright, test_name: str) -> Browser:
        """Launch a local browser or connect to one on BrowserStack"""
        browser_type = getattr(playwright, self.options.browser_type)
        slow_mo = self.options.launch_slow_mo

        if self.options.is_remote:
            capabilities = build_capabilities(self.options, test_name)
            ws_endpoint = build_ws_endpoint(self.options.browserstack_endpoint, capabilities)

            connect_options: Dict[str, Any] = {}
            if slow_mo is not None:
                connect_options["slow_mo"] = slow_mo
            if self.options.timeout is not None:
                connect_options["timeout"] = self.options.timeout

            logger.debug(f"Connecting to {capabilities['browser']} on BrowserStack for {test_name}")
            return await browser_type.connect(ws_endpoint, **connect_options)

        launch_options: Dict[str, Any] = {}
        if self.options.browser_channel:
            launch_options["channel"] = self.options.browser_channel
        if self.options.debug:
            launch_options["headless"] = False
            if self.options.browser_type == BrowserType.CHROMIUM.value:
                launch_options["args"] = ["--auto-open-devtools-for-tabs"]
        if slow_mo is not None:
            launch_options["slow_mo"] = slow_mo
        if self.options.timeout is not None:
            launch_options["timeout"] = self.options.timeout

        channel = f" ({self.options.browser_channel})" if self.options.browser_channel else ""
        logger.debug(f"Launching {self.options.browser_type}{channel} for {test_name}")
        return await browser_type.launch(**launch_options)

    def generate_file_name(self, test_name: str, extension: str) -> str:
        return generate_file_name(
            test_name,
            self.options.browser_type,
            self.options.browser_channel,
            extension,
        )

    async def try_set_session_status(self, page: Page, status: SessionStatus, reason: str = "") -> None:
        """Set the status of the session on BrowserStack, if in use"""
        if not self.options.is_remote:
            return

        try:
            await page.evaluate(NO_OP_SCRIPT, session_status_arg(status.value, reason))
        except Exception as e:
            self.output(f"Failed to set BrowserStack session status: {e}")

    async def try_capture_screenshot(self, page: Page, test_name: str) -> None:
        """Try and capture a screenshot at the point the test failed"""
        try:
            path = artifact_path(settings.SCREENSHOTS_DIRECTORY, self.generate_file_name(test_name, ".png"))
            await page.screenshot(path=path)
            self.output(f"Screenshot saved to {path}.")
        except Exception as e:
            self.output(f"Failed to capture screenshot: {e}")

    async def try_stop_trace(self, context: BrowserContext, test_name: str) -> None:
        """Stop tracing and save the trace for use with https://trace.playwright.dev"""
        try:
            path = artifact_path(settings.TRACES_DIRECTORY, self.generate_file_name(test_name, ".zip"))
            await context.tracing.stop(path=path)
            self.output(f"Trace saved to {path}.")
        except Exception as e:
            self.output(f"Failed to capture trace: {e}")

    async def try_capture_video(self, page: Page, test_name: str) -> Optional[str]:
        """
        Save the video of the test.

        BrowserStack does not stop recording until the session has ended, so
        for remote sessions the URL of the video is returned instead, to be
        downloaded once the browser is closed.
        """
        if not self.options.capture_video:
            return None

        try:
            if self.options.is_remote:
                session_details = await page.evaluate(NO_OP_SCRIPT, SESSION_DETAILS_ARG)
                return parse_video_url(session_details)

            if page.video is None:
                return None

            path = artifact_path(settings.VIDEOS_DIRECTORY, self.generate_file_name(test_name, ".webm"))

            # The video is only written once the page is closed
            await page.close()
            await page.video.save_as(path)

            self.output(f"Video saved to {path}.")
        except Exception as e:
            self.output(f"Failed to capture video: {e}")

        return None

    async def try_capture_browserstack_video(self, video_url: str, test_name: str) -> None:
        """Download the video of a BrowserStack session once it is available"""

        def path_for_extension(extension: str) -> str:
            return artifact_path(settings.VIDEOS_DIRECTORY, self.generate_file_name(test_name, extension))

        try:
            path = await asyncio.to_thread(download_video, video_url, path_for_extension)
        except Exception as e:
            self.output(f"Failed to capture video: {e}")
            return

        if path:
            self.output(f"Video saved to {path}.")
