"""Web scraper module for fetching a display name from a profile page."""

from __future__ import annotations

import logging
import re
import socket
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import requests
import urllib3
from bs4 import BeautifulSoup
from bs4.dammit import EncodingDetector

from config import FETCH_TIMEOUT_SECONDS, USER_AGENT


logger = logging.getLogger(__name__)

_CHARSET_PATTERN = re.compile(r"charset\s*=\s*[\"']?([\w.:\-]+)", re.I)


class EnrichmentError(Exception):
    """Raised when a profile page cannot be turned into a name."""
    message = "Failed to scrape the profile URL"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class ConnectionFailure(EnrichmentError):
    """Host could not be resolved or refused the connection."""
    message = "Unable to connect to the provided URL"


class TimeoutFailure(EnrichmentError):
    message = "Request timeout - URL took too long to respond"


class HttpStatusFailure(EnrichmentError):
    """The profile URL answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str | None = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"HTTP {status_code}: {self.reason}")


class NoHeading(EnrichmentError):
    message = "No h1 tag found or h1 tag is empty"


class FetchFailure(EnrichmentError):
    """Any other transport problem (TLS, resets, unsupported scheme, redirects...)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to scrape the profile URL: {detail or 'Unknown error'}")


def _caused_by(error: BaseException, types: tuple) -> bool:
    """Search the exception chain, including urllib3 wrappers, for ``types``."""
    seen: set[int] = set()
    pending: list = [error]
    while pending:
        exc = pending.pop()
        if not isinstance(exc, BaseException) or id(exc) in seen:
            continue
        seen.add(id(exc))
        if isinstance(exc, types):
            return True
        pending.extend([exc.__cause__, exc.__context__, getattr(exc, "reason", None)])
        pending.extend(arg for arg in exc.args if isinstance(arg, BaseException))
    return False


def classify_request_error(error: requests.exceptions.RequestException) -> EnrichmentError:
    """Map a requests exception onto the enrichment error taxonomy."""
    # ConnectTimeout is also a ConnectionError; timeouts must win
    if isinstance(error, requests.exceptions.Timeout):
        return TimeoutFailure()
    # A read timeout while streaming the body surfaces as ConnectionError
    if _caused_by(error, (urllib3.exceptions.ReadTimeoutError, socket.timeout)):
        return TimeoutFailure()
    if isinstance(error, requests.exceptions.SSLError):
        return FetchFailure(str(error))
    if isinstance(error, requests.exceptions.ConnectionError) and _caused_by(
        error, (socket.gaierror, ConnectionRefusedError)
    ):
        return ConnectionFailure()
    return FetchFailure(str(error))


def decode_body(content: bytes, content_type: str = "") -> str:
    """Decode a page body.

    A charset in the Content-Type header wins, then a <meta> declaration in
    the document, then UTF-8.
    """
    match = _CHARSET_PATTERN.search(content_type or "")
    if match:
        encoding = match.group(1)
    else:
        encoding = EncodingDetector.find_declared_encoding(content, is_html=True)
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


def extract_heading(html: str) -> str:
    """Return the stripped text of the first <h1>, or "" if there is none.

    Text of nested elements is concatenated in document order with no
    separator added, so ``<h1>Jane <span>Doe</span> Johnson</h1>`` yields
    ``"Jane Doe Johnson"``. The document is parsed with HTML5 tree
    construction, so an <h1> opened inside another closes the first.
    """
    soup = BeautifulSoup(html, "html5lib")
    heading = soup.select_one("h1")
    if heading is None:
        return ""
    return heading.get_text().strip()


class ProfileScraper:
    """Fetches a profile URL and extracts the person's full name."""

    # Common headers to mimic a browser request
    HEADERS = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }

    def __init__(self, timeout: float = FETCH_TIMEOUT_SECONDS, session=None):
        """
        Args:
            timeout: Seconds allowed for the whole fetch, body included
            session: Optional requests.Session-compatible object. When None a
                fresh session is opened per fetch so requests never share one.
        """
        self.timeout = timeout
        self.session = session

    def _download(self, url: str, opened: list) -> tuple[requests.Response, bytes]:
        if self.session is not None:
            return self._read(self.session, url, opened)
        with requests.Session() as session:
            return self._read(session, url, opened)

    def _read(self, session, url: str, opened: list) -> tuple[requests.Response, bytes]:
        response = session.get(url, headers=self.HEADERS, timeout=self.timeout, stream=True)
        opened.append(response)
        try:
            if not 200 <= response.status_code < 300:
                return response, b""
            return response, response.content
        finally:
            response.close()

    def fetch_html(self, url: str) -> str:
        """Fetch a page body, classifying every failure as an EnrichmentError.

        The timeout bounds the whole exchange. requests alone only bounds the
        connect and each socket read, so the download runs in a worker thread
        and is abandoned once the deadline passes.
        """
        logger.info("[scrape] url=%s timeout=%s", url, self.timeout)
        opened: list = []
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="profile-fetch")
        future = executor.submit(self._download, url, opened)
        executor.shutdown(wait=False)
        try:
            response, content = future.result(timeout=self.timeout)
        except FutureTimeoutError as e:
            logger.warning("[scrape] deadline exceeded url=%s timeout=%s", url, self.timeout)
            for response in opened:
                response.close()
            raise TimeoutFailure() from e
        except requests.exceptions.RequestException as e:
            error = classify_request_error(e)
            logger.warning("[scrape] %s url=%s error=%s", type(error).__name__, url, e)
            raise error from e

        if not 200 <= response.status_code < 300:
            logger.warning("[scrape] status url=%s status=%s", url, response.status_code)
            raise HttpStatusFailure(response.status_code, response.reason)

        return decode_body(content, response.headers.get("Content-Type", ""))

    def scrape_full_name(self, url: str) -> str:
        """Fetch url and return the text of its first <h1>.

        Raises:
            EnrichmentError: One of the classified failures
        """
        html = self.fetch_html(url)
        full_name = extract_heading(html)
        if not full_name:
            logger.warning("[scrape] no heading url=%s body_len=%d", url, len(html))
            raise NoHeading()
        logger.info("[scrape] url=%s full_name=%s", url, full_name)
        return full_name
