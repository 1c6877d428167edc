"""
Contact Module
==============

Provides:
- Public contact form submission (/api/contact)
- Admin list and delete of submissions (/api/admin/contacts)
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__, url_prefix='/api/contact')
admin_contacts_bp = Blueprint('admin_contacts', __name__, url_prefix='/api/admin/contacts')

from . import routes
from .database import ContactDatabase

__all__ = ['contact_bp', 'admin_contacts_bp', 'ContactDatabase']
