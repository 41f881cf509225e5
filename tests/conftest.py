"""测试配置和共享 Fixtures。"""

import socket

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from app import create_app
from profile_enricher.models import EnrichedProfile
from profile_enricher.services import BaseProfileStore, EnrichmentService
from profile_enricher.web_scraper import ProfileScraper


# ============================================================================
# Mock HTTP
# ============================================================================

class FakeResponse:
    """只包含 ProfileScraper 用到的属性的 requests.Response 替身。

    text 按 UTF-8 编码为 content；需要其他编码时直接传 content。
    """

    def __init__(
        self,
        text: str = "",
        status_code: int = 200,
        reason: str = "OK",
        content: bytes | None = None,
        headers: dict | None = None,
    ):
        self.content = content if content is not None else text.encode("utf-8")
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict(
            headers if headers is not None else {"Content-Type": "text/html; charset=utf-8"}
        )
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """测试用 requests.Session 替身。

    设置 response 控制返回值；设置 error 模拟网络异常。
    所有调用记录在 calls 中。
    """

    def __init__(self):
        self.response = FakeResponse()
        self.error: Exception | None = None
        self.calls: list[dict] = []

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


class RecordingStore(BaseProfileStore):
    """不等待的存储，记录每次 save。"""

    def __init__(self):
        self.saved: list[EnrichedProfile] = []

    def save(self, profile: EnrichedProfile) -> EnrichedProfile:
        self.saved.append(profile)
        return profile


# ============================================================================
# HTML Fixtures
# ============================================================================

HTML_WITH_H1 = """
<!DOCTYPE html>
<html>
<head>
    <title>Test Profile</title>
</head>
<body>
    <h1>John Doe Smith</h1>
    <p>This is a test profile page</p>
</body>
</html>
"""

HTML_WITHOUT_H1 = """
<!DOCTYPE html>
<html>
<head>
    <title>Test Profile</title>
</head>
<body>
    <h2>Not an H1 tag</h2>
    <p>This page has no h1 tag</p>
</body>
</html>
"""

HTML_EMPTY_H1 = """
<!DOCTYPE html>
<html>
<body>
    <h1></h1>
</body>
</html>
"""

HTML_NESTED_H1 = """
<!DOCTYPE html>
<html>
<body>
    <h1>Jane <span>Doe</span> Johnson</h1>
</body>
</html>
"""


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def valid_request() -> dict:
    """合法的请求体。"""
    return {
        "username": "testuser",
        "email": "test@example.com",
        "profileUrl": "https://example.com/profile",
    }


@pytest.fixture
def fake_session() -> FakeSession:
    session = FakeSession()
    session.response = FakeResponse(HTML_WITH_H1)
    return session


@pytest.fixture
def scraper(fake_session) -> ProfileScraper:
    return ProfileScraper(session=fake_session)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def service(scraper, store) -> EnrichmentService:
    return EnrichmentService(scraper=scraper, store=store)


@pytest.fixture
def client(service):
    """Flask 测试客户端（网络和存储均为 Mock）。"""
    app = create_app(enrichment_service=service, TESTING=True)
    return app.test_client()


@pytest.fixture
def connection_error() -> requests.exceptions.ConnectionError:
    """DNS 解析失败（与 requests 实际抛出的异常链一致）。"""
    return chained(
        requests.exceptions.ConnectionError(
            "HTTPSConnectionPool(host='example.com', port=443): Max retries exceeded "
            "(Caused by NameResolutionError: Failed to resolve 'example.com')"
        ),
        socket.gaierror(-2, "Name or service not known"),
    )


def chained(error: BaseException, cause: BaseException) -> BaseException:
    """模拟 ``raise error from cause``。"""
    error.__cause__ = cause
    return error
