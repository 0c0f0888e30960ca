"""
The BrowserStack executor side channel.

BrowserStack intercepts page.evaluate() calls whose argument starts with
"browserstack_executor:" and runs the JSON command that follows against the
session. The script itself is a no-op.
See https://www.browserstack.com/docs/automate/playwright/mark-test-status
"""
import json
from typing import Any, Dict, Optional

NO_OP_SCRIPT = "_ => {}"
EXECUTOR_PREFIX = "browserstack_executor: "


def executor_arg(action: str, arguments: Optional[Dict[str, Any]] = None) -> str:
    """Format an executor command as the argument to a no-op script"""
    command: Dict[str, Any] = {"action": action}
    if arguments is not None:
        command["arguments"] = arguments
    return EXECUTOR_PREFIX + json.dumps(command, separators=(",", ":"))


def session_status_arg(status: str, reason: str = "") -> str:
    """Executor command to set the pass/fail status of the session"""
    return executor_arg("setSessionStatus", {"status": status, "reason": reason})


SESSION_DETAILS_ARG = executor_arg("getSessionDetails")


def parse_video_url(session_details: Any) -> Optional[str]:
    """Get the URL of the session video from the getSessionDetails response"""
    if isinstance(session_details, str):
        session_details = json.loads(session_details)
    if not isinstance(session_details, dict):
        return None
    return session_details.get("video_url")
