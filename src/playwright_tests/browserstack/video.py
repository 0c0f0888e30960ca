"""
Download of session videos from BrowserStack.

BrowserStack Automate does not finalize the recording until the session has
ended, and even then it may take a few seconds before the video is available,
so the URL is polled until it stops returning 404.
"""
import os
import re
import time
from typing import Callable, Optional
from urllib.parse import unquote

import requests
from loguru import logger

from playwright_tests.core import settings

DEFAULT_VIDEO_EXTENSION = ".mp4"

_FILENAME_STAR = re.compile(r"filename\*\s*=\s*(?:[\w-]+'[\w-]*')?\"?([^\";]+)\"?", re.IGNORECASE)
_FILENAME = re.compile(r"filename\s*=\s*\"?([^\";]+)\"?", re.IGNORECASE)


def content_disposition_extension(header: Optional[str], default: str = DEFAULT_VIDEO_EXTENSION) -> str:
    """Get the file extension of the file name in a Content-Disposition header"""
    if not header:
        return default

    match = _FILENAME_STAR.search(header) or _FILENAME.search(header)
    if not match:
        return default

    _, extension = os.path.splitext(unquote(match.group(1).strip()))
    return extension or default


def download_video(
    video_url: str,
    path_for_extension: Callable[[str], str],
    attempts: int = settings.VIDEO_POLL_ATTEMPTS,
    delay: float = settings.VIDEO_POLL_DELAY,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[str]:
    """
    Poll a video URL and save the video once it is available.

    Args:
        video_url: URL of the video from the session details
        path_for_extension: Returns the path to save to for a file extension
        attempts: Maximum number of requests to make
        delay: Seconds to wait after a 404 before trying again
        session: Optional requests session to use
        sleep: Function used to wait between attempts

    Returns:
        The path the video was saved to, or None if it never became available

    Raises:
        requests.HTTPError: If the server responds with an error other than 404
    """
    http = session or requests.Session()

    try:
        for attempt in range(1, attempts + 1):
            with http.get(video_url, stream=True, timeout=30) as response:
                if response.status_code == 404:
                    logger.debug(f"Video not available yet (attempt {attempt} of {attempts})")
                    not_found = True
                else:
                    not_found = False
                    response.raise_for_status()
                    return _save_video(response, path_for_extension)

            # Response is closed here, and there is no wait after the last attempt
            if not_found and attempt < attempts:
                sleep(delay)
    finally:
        if session is None:
            http.close()

    logger.debug(f"Video was not available after {attempts} attempts: {video_url}")
    return None


def _save_video(response: requests.Response, path_for_extension: Callable[[str], str]) -> str:
    """Stream a video response to the path for its file extension"""
    extension = content_disposition_extension(response.headers.get("Content-Disposition"))
    path = path_for_extension(extension)

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "wb") as f:
        for chunk in response.iter_content(chunk_size=64 * 1024):
            if chunk:
                f.write(chunk)

    return path
