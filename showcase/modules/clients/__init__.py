"""
Clients Module
==============

Client testimonials ("Happy Clients") shown on the landing page.

Provides:
- Public list API (/api/clients)
- Admin CRUD API with image upload and cropping (/api/admin/clients)
"""

from flask import Blueprint

clients_bp = Blueprint('clients', __name__, url_prefix='/api/clients')
admin_clients_bp = Blueprint('admin_clients', __name__, url_prefix='/api/admin/clients')

from . import routes
from .database import ClientDatabase

__all__ = ['clients_bp', 'admin_clients_bp', 'ClientDatabase']
