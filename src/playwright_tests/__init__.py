"""
Playwright tests

End-to-end browser tests run locally or on BrowserStack Automate.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("playwright-tests")
except PackageNotFoundError:
    __version__ = "0.1.0"
