"""
Synchronous HTTP client for the transcription / check-in service.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st

from src.core.config import get_settings
from src.core.exceptions import APIError

logger = logging.getLogger(__name__)


class APIClient:
    """Thin synchronous wrapper around httpx for the three service endpoints.

    All methods return parsed JSON bodies or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 30.0,
        transcribe_timeout: float = 120.0,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the service; endpoints live under ``/api``.
            timeout: Default request timeout in seconds.
            transcribe_timeout: Timeout for the audio upload request.
        """
        self._base_url = base_url.rstrip("/")
        self._transcribe_timeout = transcribe_timeout
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post").
            path: API endpoint path (e.g. "/api/transcribe").
            **kwargs: Passed through to httpx (json, files, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                f"Transcription service is not reachable at {self._base_url}.",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                body = exc.response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and "detail" in body:
                detail = body["detail"]
            else:
                detail = exc.response.text or str(exc)
            raise APIError(str(detail), category="http", body=body) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    def _request_json(self, method: str, path: str, **kwargs):
        """Like ``_request`` but returns the decoded JSON body."""
        resp = self._request(method, path, **kwargs)
        try:
            return resp.json()
        except ValueError:
            raise APIError(
                f"Invalid JSON in response from {path}",
                category="decode",
            ) from None

    # -- transcription --

    def transcribe(
        self,
        audio: bytes,
        filename: str = "recording.wav",
        mime_type: str = "audio/wav",
    ) -> dict:
        """Upload audio as multipart field ``audio``.

        Returns ``{"orderId": ..., "transcription": ...}``.
        """
        return self._request_json(
            "post",
            "/api/transcribe",
            files={"audio": (filename, audio, mime_type)},
            timeout=self._transcribe_timeout,
        )

    def get_status(self, order_id: str) -> dict:
        return self._request_json("get", f"/api/status/{order_id}")

    # -- check-in --

    def record_recitation(self, username: str, recited_pages: str, recite_duration: int) -> dict:
        body = {
            "username": username,
            "recited_pages": recited_pages,
            "recite_duration": recite_duration,
        }
        return self._request_json("post", "/api/record_recitation", json=body)


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:5000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    settings = get_settings()
    return APIClient(
        base_url=base_url,
        timeout=settings.request_timeout,
        transcribe_timeout=settings.transcribe_timeout,
    )
