"""Tests for the upstream HTTP client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock, patch

import pytest
import requests

from data.client import SchoolDataClient, DataFetchError


def make_response(payload=None, status_error=None):
    response = MagicMock()
    if status_error:
        response.raise_for_status.side_effect = status_error
    response.json.return_value = payload
    return response


def make_client(post_side_effect, retries=3):
    session = MagicMock()
    session.post.side_effect = post_side_effect
    return SchoolDataClient(base_url="http://example.test/webhook/", retries=retries,
                            retry_delay=1.0, session_factory=lambda: session), session


class TestPostJson:
    @patch("data.client.time.sleep")
    def test_success_first_try(self, sleep):
        client, session = make_client([make_response({"ok": True})])
        assert client.post_json("analyze-capacity") == {"ok": True}
        session.post.assert_called_once()
        assert session.post.call_args[0][0] == "http://example.test/webhook/analyze-capacity"
        sleep.assert_not_called()

    @patch("data.client.time.sleep")
    def test_retries_then_succeeds(self, sleep):
        client, session = make_client([
            requests.ConnectionError("down"),
            make_response(status_error=requests.HTTPError("502")),
            make_response([1, 2]),
        ])
        assert client.post_json("travel-time-heatmap") == [1, 2]
        assert session.post.call_count == 3
        # Linear backoff: 1s, then 2s
        assert [c.args[0] for c in sleep.call_args_list] == [1.0, 2.0]

    @patch("data.client.time.sleep")
    def test_gives_up_after_bounded_attempts(self, sleep):
        client, session = make_client(requests.Timeout("slow"), retries=3)
        with pytest.raises(DataFetchError) as exc:
            client.post_json("analyze-capacity")
        assert session.post.call_count == 4
        assert exc.value.attempts == 4
        assert exc.value.endpoint == "analyze-capacity"

    @patch("data.client.time.sleep")
    def test_invalid_json_is_retried(self, sleep):
        bad = make_response()
        bad.json.side_effect = ValueError("not json")
        client, session = make_client([bad, make_response({"ok": 1})])
        assert client.post_json("x") == {"ok": 1}

    @patch("data.client.time.sleep")
    def test_session_closed_after_failure(self, sleep):
        client, session = make_client(requests.ConnectionError("down"), retries=1)
        with pytest.raises(DataFetchError):
            client.post_json("analyze-capacity")
        session.close.assert_called_once()

    def test_each_request_gets_its_own_session(self):
        sessions = []

        def factory():
            session = MagicMock()
            session.post.return_value = make_response([])
            sessions.append(session)
            return session

        client = SchoolDataClient(base_url="http://example.test", session_factory=factory)
        client.fetch_all()
        assert len(sessions) == 3
        assert all(s.post.call_count == 1 for s in sessions)
        assert all(not s.headers.update.called for s in sessions)


class TestEndpointMethods:
    def test_each_method_posts_to_its_endpoint(self):
        client, session = make_client(lambda url, json=None, timeout=None: make_response({"url": url}))
        assert client.get_capacity_analysis() == {"url": "http://example.test/webhook/analyze-capacity"}
        assert client.get_optimal_locations() == {"url": "http://example.test/webhook/find-optimal-locations"}
        assert client.get_travel_time_heatmap() == {"url": "http://example.test/webhook/travel-time-heatmap"}

    def test_fetch_all_goes_through_endpoint_methods(self):
        client, _ = make_client(lambda url, json=None, timeout=None: make_response([]))
        with patch.object(client, "get_capacity_analysis", return_value=["cap"]) as cap, \
                patch.object(client, "get_optimal_locations", return_value=["site"]), \
                patch.object(client, "get_travel_time_heatmap", return_value=["travel"]):
            result = client.fetch_all()
        cap.assert_called_once()
        assert result.payloads == {"capacity": ["cap"], "sites": ["site"], "travel": ["travel"]}


class TestFetchAll:
    @patch("data.client.time.sleep")
    def test_partial_failure_substitutes_empty_list(self, sleep):
        def post(url, json=None, timeout=None):
            if url.endswith("find-optimal-locations"):
                raise requests.ConnectionError("down")
            return make_response({"url": url})

        client, _ = make_client(post)
        result = client.fetch_all()
        assert not result.ok
        assert result.payloads["sites"] == []
        assert "sites" in result.errors
        assert result.payloads["capacity"] == {"url": "http://example.test/webhook/analyze-capacity"}
        assert result.payloads["travel"] == {"url": "http://example.test/webhook/travel-time-heatmap"}

    @patch("data.client.time.sleep")
    def test_all_succeed(self, sleep):
        client, _ = make_client(lambda url, json=None, timeout=None: make_response([]))
        result = client.fetch_all()
        assert result.ok
        assert set(result.payloads) == {"capacity", "sites", "travel"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
