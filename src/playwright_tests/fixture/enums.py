import enum

class BrowserType(str, enum.Enum):
    """Playwright browser engines"""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

class BrowserChannel(str, enum.Enum):
    """Branded distributions of an engine"""
    CHROME = "chrome"
    MSEDGE = "msedge"

class OperatingSystem(str, enum.Enum):
    """Operating systems used to tag artifacts"""
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    OTHER = "other"

class SessionStatus(str, enum.Enum):
    """Status reported to BrowserStack for a session"""
    PASSED = "passed"
    FAILED = "failed"
