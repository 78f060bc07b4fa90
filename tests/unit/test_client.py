"""Tests for the HTTP client. The requests session is mocked."""

from unittest.mock import MagicMock

import pytest
import requests

from topearner.sdk.client import TaskClient
from topearner.sdk.errors import RetrievalError, SubmissionError


def make_response(status_code=200, reason="OK", json_body=None, text=""):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.ok = 200 <= status_code < 400
    response.text = text
    response.content = text.encode()
    if isinstance(json_body, Exception):
        response.json.side_effect = json_body
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return TaskClient(
        get_url="http://test/get-task",
        submit_url="http://test/submit-task",
        timeout=3,
        session=session,
    )


class TestFetchTask:

    def test_returns_decoded_json(self, client, session):
        payload = {"id": "abc", "transactions": []}
        session.get.return_value = make_response(json_body=payload)

        assert client.fetch_task() == payload
        session.get.assert_called_once_with("http://test/get-task", timeout=3)

    def test_http_error_status(self, client, session):
        session.get.return_value = make_response(status_code=503, reason="Service Unavailable")

        with pytest.raises(RetrievalError) as exc_info:
            client.fetch_task()

        assert exc_info.value.status_code == 503
        assert exc_info.value.url == "http://test/get-task"

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(RetrievalError, match="refused"):
            client.fetch_task()

    def test_timeout(self, client, session):
        session.get.side_effect = requests.Timeout("slow")

        with pytest.raises(RetrievalError):
            client.fetch_task()

    def test_non_json_body(self, client, session):
        session.get.return_value = make_response(json_body=ValueError("Expecting value"), text="<html>")

        with pytest.raises(RetrievalError, match="not JSON"):
            client.fetch_task()


class TestSubmit:

    def test_posts_json_with_content_type(self, client, session):
        session.post.return_value = make_response(status_code=200, reason="OK", text="correct")
        submission = {"id": "abc", "result": ["TX_003"]}

        response = client.submit(submission)

        session.post.assert_called_once_with(
            "http://test/submit-task",
            json=submission,
            headers={"Content-Type": "application/json"},
            timeout=3,
        )
        assert response.ok
        assert response.text == "correct"
        assert str(response) == "STATUS: 200 OK"

    def test_non_2xx_is_returned_not_raised(self, client, session):
        session.post.return_value = make_response(status_code=400, reason="Bad Request")

        response = client.submit({"id": "abc", "result": []})

        assert response.status_code == 400
        assert response.ok is False

    def test_connection_error(self, client, session):
        session.post.side_effect = requests.ConnectionError("reset")

        with pytest.raises(SubmissionError, match="reset"):
            client.submit({"id": "abc", "result": []})


class TestSessionLifecycle:

    def test_injected_session_not_closed(self, session):
        with TaskClient(session=session):
            pass
        session.close.assert_not_called()

    def test_own_session_closed(self, monkeypatch):
        created = MagicMock(spec=requests.Session)
        monkeypatch.setattr(requests, "Session", lambda: created)

        with TaskClient():
            pass
        created.close.assert_called_once()
