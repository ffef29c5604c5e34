"""
Storefront API Client
=====================

Thin wrapper around the storefront REST API that every admin screen reads
from and writes to. Mutating calls carry the admin's bearer token.
"""

import requests
from typing import Optional, Dict, Any, List, Tuple
from flask import session

from .config import get_config_value
from .logging_service import LoggingService

# Keys the API has been seen to wrap list payloads in
LIST_KEYS = ('products', 'users', 'data', 'result', 'items')


class APIError(Exception):
    """Raised when a storefront API call fails for any reason"""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


def get_image_url(image_path: Optional[str], base_url: str = None) -> str:
    """
    Get the full image URL.

    Absolute URLs are returned unchanged; relative paths are joined onto the
    API host (the base URL without its /api suffix).
    """
    if not image_path:
        return ''

    if image_path.startswith('http://') or image_path.startswith('https://'):
        return image_path

    host = (base_url or get_config_value('API_BASE_URL', '')).rstrip('/')
    if host.endswith('/api'):
        host = host[:-len('/api')]
    separator = '' if image_path.startswith('/') else '/'
    return f"{host}{separator}{image_path}"


def unwrap_list(data: Any) -> List[Dict[str, Any]]:
    """Extract a list of records from the shapes the API returns"""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in LIST_KEYS:
            if isinstance(data.get(key), list):
                return data[key]
    return []


class StorefrontAPI:
    """Client for the storefront REST API"""

    def __init__(self, base_url: str, token: str = None, timeout: int = 15,
                 session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, auth: bool, has_body: bool) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        if has_body:
            headers['Content-Type'] = 'application/json'
        if auth and self.token:
            headers['Authorization'] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, json: Dict[str, Any] = None,
                auth: bool = True) -> Any:
        """
        Perform a request and return the decoded JSON body.

        Raises:
            APIError: on transport failure, HTTP status >= 400, or a body that isn't JSON
        """
        url = self._url(path)
        headers = self._headers(auth, json is not None)

        try:
            response = self.session.request(method, url, headers=headers, json=json,
                                            timeout=self.timeout)
        except requests.RequestException as e:
            LoggingService.log_api_call('api', path, method, None, {'error': str(e)})
            raise APIError(f"Could not reach storefront API: {e}") from e

        LoggingService.log_api_call('api', path, method, response.status_code)

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            message = payload.get('message') if isinstance(payload, dict) else None
            raise APIError(message or f"API returned {response.status_code}",
                           status_code=response.status_code, payload=payload)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise APIError("API returned an invalid JSON body",
                           status_code=response.status_code) from e

    def get(self, path: str, auth: bool = False) -> Any:
        return self.request('GET', path, auth=auth)

    def post(self, path: str, json: Dict[str, Any]) -> Any:
        return self.request('POST', path, json=json)

    def put(self, path: str, json: Dict[str, Any]) -> Any:
        return self.request('PUT', path, json=json)

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    # ===== Authentication =====

    def login(self, email: str, password: str, login_path: str = '/auth/login') -> Tuple[str, Dict[str, Any]]:
        """Exchange admin credentials for a bearer token and the user record"""
        data = self.request('POST', login_path, json={'email': email, 'password': password},
                            auth=False) or {}

        token = data.get('token')
        if not token:
            raise APIError(data.get('message') or 'Login response did not include a token',
                           payload=data)

        user = data.get('user') or {}
        admin_user = {
            'id': user.get('_id') or user.get('id'),
            'name': user.get('name', ''),
            'email': user.get('email', email),
            'role': user.get('role', 'user')
        }
        return token, admin_user

    # ===== Collections =====

    def list_collection(self, path: str, auth: bool = False) -> List[Dict[str, Any]]:
        return unwrap_list(self.get(path, auth=auth))

    def count_collection(self, path: str, auth: bool = False) -> int:
        """Count a collection, preferring the API's own total when it sends one"""
        data = self.get(path, auth=auth)
        if isinstance(data, dict) and isinstance(data.get('total'), int):
            return data['total']
        return len(unwrap_list(data))

    # ===== Orders =====

    def list_orders(self) -> List[Dict[str, Any]]:
        return self.list_collection('/orders')

    def update_order(self, order_id: str, fields: Dict[str, Any]) -> Any:
        """Send a partial update for an order"""
        return self.put(f"/orders/{order_id}", fields)


def get_api() -> StorefrontAPI:
    """Build a client for the current request using config and the session token"""
    return StorefrontAPI(
        base_url=get_config_value('API_BASE_URL'),
        token=session.get('admin_token'),
        timeout=int(get_config_value('API_TIMEOUT', 15))
    )
