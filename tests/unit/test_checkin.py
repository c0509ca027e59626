"""Tests for check-in validation and submission."""

import httpx
import pytest

from src.core.exceptions import APIError
from src.services.checkin import (
    CHECKIN_FAILED_TEXT,
    CHECKIN_INCOMPLETE_TEXT,
    submit_check_in,
)
from src.ui.api_client import APIClient


class TestValidation:
    """Incomplete check-ins never reach the network."""

    @pytest.mark.parametrize(
        ("username", "pages", "duration"),
        [
            ("", "1,2", 30),
            ("amina", "", 30),
            ("amina", "1,2", 0),
            ("", "", 0),
        ],
    )
    def test_incomplete_fields(self, mock_client, username, pages, duration):
        assert submit_check_in(mock_client, username, pages, duration) == CHECKIN_INCOMPLETE_TEXT
        mock_client.record_recitation.assert_not_called()


class TestSubmission:
    def test_success_returns_server_message(self, mock_client):
        mock_client.record_recitation.return_value = {
            "message": "Recitation recorded",
            "record": {"id": 3},
        }

        message = submit_check_in(mock_client, "amina", "1,2,3", 125)

        assert message == "Recitation recorded"
        mock_client.record_recitation.assert_called_once_with(
            username="amina", recited_pages="1,2,3", recite_duration=125
        )

    def test_api_error_returns_generic_message(self, mock_client):
        mock_client.record_recitation.side_effect = APIError("boom", category="http")
        assert submit_check_in(mock_client, "amina", "1", 5) == CHECKIN_FAILED_TEXT

    def test_unexpected_body_returns_generic_message(self, mock_client):
        mock_client.record_recitation.return_value = "ok"
        assert submit_check_in(mock_client, "amina", "1", 5) == CHECKIN_FAILED_TEXT

    def test_missing_message_is_empty(self, mock_client):
        mock_client.record_recitation.return_value = {"record": {}}
        assert submit_check_in(mock_client, "amina", "1", 5) == ""


def _client_replying(status_code: int, **response_kwargs) -> APIClient:
    """APIClient whose transport answers every request with one canned reply."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **response_kwargs)

    api = APIClient(base_url="http://test:5000")
    api._client = httpx.Client(
        base_url="http://test:5000", transport=httpx.MockTransport(handler)
    )
    return api


class TestServiceReplies:
    """Replies travel through the real APIClient error handling."""

    def test_ok_reply(self):
        api = _client_replying(200, json={"message": "Recitation recorded", "record": {"id": 1}})
        assert submit_check_in(api, "amina", "1,2", 30) == "Recitation recorded"

    def test_error_status_with_message_is_shown(self):
        """A rejected check-in shows the service's own explanation."""
        api = _client_replying(400, json={"message": "User not found"})
        assert submit_check_in(api, "ghost", "1,2", 30) == "User not found"

    def test_error_status_without_message(self):
        api = _client_replying(500, json={"detail": "boom"})
        assert submit_check_in(api, "amina", "1,2", 30) == CHECKIN_FAILED_TEXT

    def test_error_status_with_text_body(self):
        api = _client_replying(502, text="Bad Gateway")
        assert submit_check_in(api, "amina", "1,2", 30) == CHECKIN_FAILED_TEXT

    def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        api = APIClient(base_url="http://test:5000")
        api._client = httpx.Client(
            base_url="http://test:5000", transport=httpx.MockTransport(handler)
        )
        assert submit_check_in(api, "amina", "1,2", 30) == CHECKIN_FAILED_TEXT
