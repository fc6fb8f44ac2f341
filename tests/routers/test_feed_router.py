from fastapi import FastAPI
from fastapi.testclient import TestClient

from dailyposts import dependencies as deps
from dailyposts.routers import feed


class FakeFeedService:
    def __init__(self, xml=None, error=None):
        self.xml = xml
        self.error = error

    def render(self):
        if self.error:
            raise self.error
        return self.xml


def make_client(service):
    app = FastAPI()
    app.dependency_overrides[deps.get_feed_service] = lambda: service
    app.include_router(feed.router)
    return TestClient(app)


def test_feed_is_served_as_rss():
    client = make_client(FakeFeedService(xml="<rss version=\"2.0\"/>"))

    res = client.get("/feed.xml")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/rss+xml")
    assert res.text == '<rss version="2.0"/>'


def test_feed_failure_returns_500():
    client = make_client(FakeFeedService(error=RuntimeError("boom")))

    res = client.get("/feed.xml")

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to build feed"
