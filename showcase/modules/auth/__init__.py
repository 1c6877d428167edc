"""
Showcase Auth Module

Provides admin authentication:
- Username/password login exchanging credentials for a bearer token
- require_admin decorator guarding the /api/admin/* routes
- Admin account storage and seeding
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

from . import routes
from .database import AdminDatabase
from .tokens import create_token, decode_token, require_admin

__all__ = ['auth_bp', 'AdminDatabase', 'create_token', 'decode_token', 'require_admin']
