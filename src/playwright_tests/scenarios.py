"""
End-to-end scenarios run by the browser tests
"""
import asyncio

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

SEARCH_ENGINE_URL = "https://www.bing.com/"


async def search_for_dotnet_core(page: Page) -> None:
    """Search Bing for .NET Core and click through to a result"""
    # Open the search engine
    await page.goto(SEARCH_ENGINE_URL)
    await page.wait_for_load_state()

    try:
        # Dismiss any cookies banner
        element = await page.wait_for_selector("text='Accept'", timeout=15_000)

        if element is not None:
            await element.click()
            await element.wait_for_element_state("hidden")
            await asyncio.sleep(1)
    except PlaywrightTimeoutError:
        # No banner
        pass

    # Search for the desired term
    await page.fill("[name='q']", ".net core")
    await page.keyboard.press("Enter")

    # Wait for the results to load
    await page.wait_for_selector("[aria-label='Search Results']")

    # Click through to the desired result
    await page.click("a:has-text(\".NET\")")
