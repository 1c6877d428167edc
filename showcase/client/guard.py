"""
Auth guard for admin views.

A stored token is all it takes: no expiry check and no server round-trip.
An expired token passes until the first API call fails.
"""

LOGIN_PATH = '/login'


class ProtectedRoute:
    def __init__(self, session_context, navigate):
        self.session_context = session_context
        self.navigate = navigate

    def is_allowed(self):
        return self.session_context.is_authenticated()

    def render(self, children):
        """Return children() when authenticated; otherwise redirect and return None"""
        if not self.is_allowed():
            self.navigate(LOGIN_PATH, replace=True)
            return None
        return children()
