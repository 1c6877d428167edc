"""
API Client
==========

Wraps requests with the platform base URL and the admin bearer token.
Returns parsed JSON bodies; raises ApiError on transport failures and
non-2xx responses. No retries, no token refresh, no request queueing.
"""

import logging
import requests
from ..core.config import Config

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    A failed API call.

    status is None for transport failures (connection refused, DNS, ...).
    message is the server-provided message when the body carried one.
    """

    def __init__(self, message, status=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    @property
    def server_message(self):
        """The message from the response body, if the server sent one"""
        if isinstance(self.payload, dict):
            return self.payload.get('message')
        return None


class ApiClient:
    def __init__(self, session_context, base_url=None, http=None, timeout=None):
        self.session_context = session_context
        self.base_url = (base_url or Config.SHOWCASE_API_URL).rstrip('/')
        self.http = http or requests.Session()
        self.timeout = timeout

    def _url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, headers=None):
        merged = dict(headers or {})
        token = self.session_context.get()
        if token:
            merged['Authorization'] = f'Bearer {token}'
        return merged

    def request(self, method, path, json=None, data=None, files=None, headers=None):
        url = self._url(path)
        try:
            response = self.http.request(
                method,
                url,
                json=json,
                data=data,
                files=files,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(str(e) or 'Network error') from e

        payload = self._parse(response)

        if not response.ok:
            message = None
            if isinstance(payload, dict):
                message = payload.get('message') or payload.get('error')
            message = message or f"Request failed with status code {response.status_code}"
            logger.info("%s %s -> %s: %s", method, url, response.status_code, message)
            raise ApiError(message, status=response.status_code, payload=payload)

        return payload

    @staticmethod
    def _parse(response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path, **kwargs):
        return self.request('GET', path, **kwargs)

    def post(self, path, **kwargs):
        return self.request('POST', path, **kwargs)

    def put(self, path, **kwargs):
        return self.request('PUT', path, **kwargs)

    def delete(self, path, **kwargs):
        return self.request('DELETE', path, **kwargs)
