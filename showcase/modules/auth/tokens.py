"""
Bearer Tokens
=============

HS256 JWTs carrying the admin id and username.
"""

from datetime import datetime, timedelta, timezone
from functools import wraps
import jwt
from flask import request, g
from ...core import APIError, LoggingService, get_config_value

ALGORITHM = 'HS256'


def create_token(admin):
    expires_hours = int(get_config_value('JWT_EXPIRES_HOURS', 24))
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(admin['id']),
        'username': admin['username'],
        'iat': now,
        'exp': now + timedelta(hours=expires_hours),
    }
    return jwt.encode(payload, get_config_value('JWT_SECRET'), algorithm=ALGORITHM)


def decode_token(token):
    """Decode a token, raising jwt.InvalidTokenError when it is bad or expired"""
    return jwt.decode(token, get_config_value('JWT_SECRET'), algorithms=[ALGORITHM])


def require_admin(f):
    """Decorator to require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization', '')
        if not auth_header.startswith('Bearer ') or not auth_header[7:].strip():
            raise APIError('Not authorized, no token', 401)

        try:
            payload = decode_token(auth_header[7:].strip())
        except jwt.InvalidTokenError as e:
            LoggingService.log_security_event('Rejected bearer token', {'reason': str(e)})
            raise APIError('Not authorized, token failed', 401)

        g.admin = {'id': payload.get('sub'), 'username': payload.get('username')}
        return f(*args, **kwargs)

    return decorated_function
