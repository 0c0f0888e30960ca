"""
Options for configuring how a BrowserFixture obtains a browser
"""
from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from playwright_tests.core import settings
from playwright_tests.fixture.enums import BrowserType


class BrowserStackCredentials(BaseModel):
    """Credentials used to connect to BrowserStack Automate"""
    user_name: str
    access_key: str

    model_config = ConfigDict(frozen=True)

    @field_validator('user_name', 'access_key')
    def validate_not_empty(cls, v):
        """User name and access key are required together"""
        if not v or not v.strip():
            raise ValueError("BrowserStack user name and access key must both be set")
        return v


class BrowserFixtureOptions(BaseModel):
    """Options to use with a BrowserFixture"""
    browser_type: str = BrowserType.CHROMIUM.value
    browser_channel: Optional[str] = None

    # Labels reported to BrowserStack
    build: Optional[str] = None
    operating_system: Optional[str] = None
    operating_system_version: Optional[str] = None
    playwright_version: Optional[str] = None
    project_name: Optional[str] = None
    test_name: Optional[str] = None

    use_browserstack: bool = False
    browserstack_credentials: Optional[BrowserStackCredentials] = None
    browserstack_endpoint: str = Field(default_factory=lambda: settings.BROWSERSTACK_ENDPOINT)

    capture_trace: bool = Field(default_factory=lambda: settings.CAPTURE_TRACE)
    capture_video: bool = Field(default_factory=lambda: settings.CAPTURE_VIDEO)

    # Headed browser with devtools open, for interactive debugging
    debug: bool = Field(default_factory=lambda: settings.is_debugger_attached())
    slow_mo: Optional[float] = None
    timeout: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @field_validator('browser_type', mode='before')
    def validate_browser_type(cls, v):
        """Browser type must be one Playwright supports"""
        if isinstance(v, BrowserType):
            return v.value
        try:
            return BrowserType(v).value
        except ValueError:
            raise ValueError(f"Invalid browser type: {v}")

    @field_validator('browser_channel', mode='before')
    def validate_browser_channel(cls, v):
        """Treat an empty channel as no channel"""
        if hasattr(v, "value"):
            v = v.value
        return v or None

    @property
    def is_remote(self) -> bool:
        """Whether the browser is provided by BrowserStack rather than launched locally"""
        return self.use_browserstack and self.browserstack_credentials is not None

    @property
    def launch_slow_mo(self) -> Optional[float]:
        """Slow-down applied to browser operations"""
        if self.slow_mo is not None:
            return self.slow_mo
        return settings.DEBUG_SLOW_MO if self.debug else None
