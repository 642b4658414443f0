"""Provider URL builders and the retrying HTTP fetch client.

No network: ``ChanClient`` runs against a scripted fake session.
"""

from __future__ import annotations

import unittest

import requests

from lazychan.client import (
    ChanClient,
    FetchError,
    FourChanProvider,
    HttpConfig,
    available_provider_names,
    provider_from_name,
)


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: object = None, bad_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status={self.status_code}", response=self)

    def json(self) -> object:
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


class _FakeSession:
    def __init__(self, *outcomes) -> None:
        self.headers: dict[str, str] = {}
        self.outcomes = list(outcomes)
        self.requested: list[tuple[str, float]] = []

    def get(self, url: str, timeout: float):
        self.requested.append((url, timeout))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(*outcomes, max_retries: int = 2) -> tuple[ChanClient, _FakeSession, list[float]]:
    session = _FakeSession(*outcomes)
    sleeps: list[float] = []
    client = ChanClient(
        FourChanProvider(),
        HttpConfig(timeout_sec=3.0, max_retries=max_retries),
        session=session,
        sleep=sleeps.append,
    )
    return client, session, sleeps


class ProviderTests(unittest.TestCase):
    def test_lookup(self) -> None:
        self.assertIsInstance(provider_from_name("default"), FourChanProvider)
        self.assertIsInstance(provider_from_name("4chan"), FourChanProvider)
        self.assertIsNone(provider_from_name("8kun"))
        self.assertEqual(available_provider_names(), ("4chan", "default"))

    def test_endpoints(self) -> None:
        provider = FourChanProvider()
        self.assertEqual(provider.boards_endpoint(), "https://a.4cdn.org/boards.json")
        self.assertEqual(provider.threads_endpoint("g", 2), "https://a.4cdn.org/g/2.json")
        self.assertEqual(provider.thread_endpoint("g", 99), "https://a.4cdn.org/g/thread/99.json")

    def test_links(self) -> None:
        provider = FourChanProvider()
        self.assertEqual(provider.content_url("g"), "https://boards.4chan.org/g/")
        self.assertEqual(provider.thread_url("g", 99), "https://boards.4chan.org/g/thread/99")
        self.assertEqual(provider.post_url("g", 99, 101), "https://boards.4chan.org/g/thread/99#p101")
        self.assertEqual(provider.file_url("g", "123.png"), "https://i.4cdn.org/g/123.png")


class ChanClientTests(unittest.TestCase):
    def test_fetch_boards_decodes_payload(self) -> None:
        client, session, _ = _client(_FakeResponse(payload={"boards": [{"board": "g", "title": "Technology"}]}))

        boards = client.fetch_boards()

        self.assertEqual([board.board for board in boards], ["g"])
        self.assertEqual(session.requested, [("https://a.4cdn.org/boards.json", 3.0)])
        self.assertEqual(session.headers["User-Agent"], "lazychan")

    def test_fetch_threads_and_thread(self) -> None:
        client, session, _ = _client(
            _FakeResponse(payload={"threads": [{"posts": [{"no": 7}]}]}),
            _FakeResponse(payload={"posts": [{"no": 7}, {"no": 8}]}),
        )

        threads = client.fetch_threads("g", 3)
        posts = client.fetch_thread("g", 7)

        self.assertEqual(threads[0].opening_post.no, 7)
        self.assertEqual([post.no for post in posts], [7, 8])
        self.assertEqual(session.requested[0][0], "https://a.4cdn.org/g/3.json")
        self.assertEqual(session.requested[1][0], "https://a.4cdn.org/g/thread/7.json")

    def test_transient_status_is_retried(self) -> None:
        client, session, sleeps = _client(
            _FakeResponse(status_code=503),
            _FakeResponse(status_code=429),
            _FakeResponse(payload={"posts": []}),
        )

        with self.assertLogs("lazychan.client.http", level="WARNING"):
            posts = client.fetch_thread("g", 1)

        self.assertEqual(posts, [])
        self.assertEqual(len(session.requested), 3)
        self.assertEqual(sleeps, [0.5, 1.0])

    def test_connection_errors_exhaust_retries(self) -> None:
        client, session, sleeps = _client(
            requests.ConnectionError("down"),
            requests.ConnectionError("down"),
            max_retries=1,
        )

        with self.assertLogs("lazychan.client.http", level="WARNING"):
            with self.assertRaises(FetchError) as ctx:
                client.fetch_boards()

        self.assertEqual(ctx.exception.url, "https://a.4cdn.org/boards.json")
        self.assertEqual(len(session.requested), 2)
        self.assertEqual(sleeps, [0.5])

    def test_not_found_fails_without_retry(self) -> None:
        client, session, sleeps = _client(_FakeResponse(status_code=404))

        with self.assertLogs("lazychan.client.http", level="ERROR"):
            with self.assertRaises(FetchError):
                client.fetch_thread("g", 404)

        self.assertEqual(len(session.requested), 1)
        self.assertEqual(sleeps, [])

    def test_invalid_json_is_fetch_error(self) -> None:
        client, _, _ = _client(_FakeResponse(bad_json=True))

        with self.assertLogs("lazychan.client.http", level="ERROR"):
            with self.assertRaises(FetchError) as ctx:
                client.fetch_boards()
        self.assertEqual(ctx.exception.reason, "invalid JSON response")

    def test_unexpected_shape_is_fetch_error(self) -> None:
        client, _, _ = _client(_FakeResponse(payload={"unexpected": True}))

        with self.assertRaises(FetchError) as ctx:
            client.fetch_threads("g", 1)
        self.assertIn("unexpected payload", ctx.exception.reason)


if __name__ == "__main__":
    unittest.main()
