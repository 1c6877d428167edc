"""
Showcase Client
===============

The front-end side of the platform: API client, resource services, the
token session, toasts, the view-state loader, the admin guard, forms and
page controllers.
"""

from .api import ApiClient, ApiError
from .session import LocalStorage, SessionContext, TOKEN_KEY
from .services import (
    ImageUpload,
    AuthService,
    ProjectService,
    ClientService,
    ContactService,
    NewsletterService,
    Services,
)
from .toast import Toast, ToastStore
from .loader import LoadStatus, ResourceLoader, ViewState
from .guard import ProtectedRoute, LOGIN_PATH


def create_services(base_url=None, storage_path=None, http=None):
    """Wire a session, an API client and the services around one token store"""
    session_context = SessionContext(LocalStorage(storage_path) if storage_path else None)
    api = ApiClient(session_context, base_url=base_url, http=http)
    return Services(api)


__all__ = [
    'ApiClient',
    'ApiError',
    'LocalStorage',
    'SessionContext',
    'TOKEN_KEY',
    'ImageUpload',
    'AuthService',
    'ProjectService',
    'ClientService',
    'ContactService',
    'NewsletterService',
    'Services',
    'Toast',
    'ToastStore',
    'LoadStatus',
    'ResourceLoader',
    'ViewState',
    'ProtectedRoute',
    'LOGIN_PATH',
    'create_services',
]
