"""
Tests for the GitHub API client functions.
"""

import threading
from functools import partial
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
from github import Github
from github.Auth import Token
from github.GithubException import GithubException
from requests.exceptions import ConnectionError as RequestsConnectionError

from ghcontribs import client
from ghcontribs.client import (
    FetchError,
    fetch_all,
    fetch_merged_pull_requests,
    fetch_repositories,
    fetch_user_info,
    make_client,
)

from .conftest import FakeGithub


def test_fetch_all_returns_four_resources(fake_gh, user_info, repositories, events, pull_requests):
    result = fetch_all(fake_gh, "jblz")

    assert result == (user_info, repositories, events, pull_requests)
    assert {url for url, _ in fake_gh.requester.calls} == {
        "/users/jblz",
        "/users/jblz/repos",
        "/users/jblz/events/public",
        "/search/issues",
    }


def test_repositories_request_parameters(fake_gh):
    fetch_repositories(fake_gh, "jblz")

    assert fake_gh.requester.calls == [
        ("/users/jblz/repos", {"sort": "updated", "per_page": 100, "type": "all"})
    ]


def test_search_query_for_merged_pull_requests(fake_gh):
    fetch_merged_pull_requests(fake_gh, "jblz")

    _, params = fake_gh.requester.calls[0]
    assert params["q"] == "is:pr is:merged author:jblz"
    assert params["sort"] == "updated"
    assert params["order"] == "desc"


def test_search_without_items_is_empty():
    gh = FakeGithub({"/search/issues": {"total_count": 0}})

    assert fetch_merged_pull_requests(gh, "jblz") == []


def test_http_error_becomes_fetch_error(api_responses):
    api_responses["/users/jblz/events/public"] = GithubException(404, {"message": "Not Found"})

    with pytest.raises(FetchError, match="HTTP 404") as info:
        fetch_all(FakeGithub(api_responses), "jblz")

    assert isinstance(info.value.__cause__, GithubException)


def test_connection_error_becomes_fetch_error(api_responses):
    api_responses["/users/jblz"] = RequestsConnectionError("connection refused")

    with pytest.raises(FetchError, match="connection refused"):
        fetch_all(FakeGithub(api_responses), "jblz")


class RecordingGithub:
    def __init__(self, **kwargs):
        self.kwargs = kwargs


def test_make_client_settings_anonymous(monkeypatch):
    monkeypatch.setattr(client, "Github", RecordingGithub)

    gh = make_client(None)

    assert gh.kwargs["auth"] is None
    assert gh.kwargs["timeout"] == 10
    assert gh.kwargs["per_page"] == 100
    assert gh.kwargs["user_agent"].endswith(".github.io-data-fetcher")
    assert gh.kwargs["retry"] is None


def test_make_client_uses_token(monkeypatch):
    monkeypatch.setattr(client, "Github", RecordingGithub)

    gh = make_client("secret")

    assert isinstance(gh.kwargs["auth"], Token)
    assert gh.kwargs["auth"].token == "secret"


@pytest.fixture
def bad_gateway():
    """Local server answering every request with 502, counting hits."""

    hits = []

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            hits.append(self.path)
            body = b'{"message": "Bad Gateway"}'
            self.send_response(502)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    server = HTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield f"http://127.0.0.1:{server.server_port}", hits

    server.shutdown()
    server.server_close()


def test_failing_endpoint_requested_once(monkeypatch, bad_gateway):
    base_url, hits = bad_gateway
    monkeypatch.setattr(client, "Github", partial(Github, base_url=base_url))

    with pytest.raises(FetchError, match="HTTP 502"):
        fetch_user_info(make_client(None), "jblz")

    assert len(hits) == 1
