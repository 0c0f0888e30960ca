"""
Client for the BrowserStack Automate REST API
"""
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
from loguru import logger
from pydantic import BaseModel, ConfigDict

from playwright_tests.core import settings


class BrowserStackError(Exception):
    """Raised when a request to the BrowserStack API fails"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AutomatePlanStatus(BaseModel):
    """Status of the Automate plan, including parallel session usage"""
    automate_plan: Optional[str] = None
    parallel_sessions_running: int = 0
    parallel_sessions_max_allowed: int = 0
    queued_sessions: int = 0
    queued_sessions_max_allowed: int = 0

    model_config = ConfigDict(extra="ignore")

    @property
    def has_capacity(self) -> bool:
        """Whether another parallel session can be started now"""
        return (
            self.parallel_sessions_max_allowed >= 1
            and self.parallel_sessions_running < self.parallel_sessions_max_allowed
        )


class BrowserStackAutomateClient:
    """Client for the BrowserStack Automate API"""

    def __init__(
        self,
        user_name: str,
        access_key: str,
        api_url: Optional[str] = None,
        timeout: int = 30,
    ):
        self.api_url = (api_url or settings.BROWSERSTACK_API_URL).rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.auth = (user_name, access_key)
        self.session.headers.update({"Accept": "application/json"})

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        self.session.close()

    def _make_api_request(self, method: str, endpoint: str) -> Dict[str, Any]:
        """Make an API request to BrowserStack"""
        url = urljoin(self.api_url + "/", endpoint.lstrip("/"))

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"BrowserStack API request error: {str(e)}")
            raise BrowserStackError(f"BrowserStack API request error: {str(e)}") from e

        if response.status_code >= 400:
            logger.error(f"BrowserStack API request failed: {response.status_code} - {response.text}")
            raise BrowserStackError(
                f"BrowserStack API request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        return response.json() if response.content else {}

    def get_status(self) -> AutomatePlanStatus:
        """Get the status of the Automate plan"""
        return AutomatePlanStatus.model_validate(self._make_api_request("GET", "/automate/plan.json"))
