"""
Projects Module
===============

Portfolio projects shown on the landing page.

Provides:
- Public list API (/api/projects)
- Admin CRUD API with image upload and cropping (/api/admin/projects)
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')
admin_projects_bp = Blueprint('admin_projects', __name__, url_prefix='/api/admin/projects')

from . import routes
from .database import ProjectDatabase

__all__ = ['projects_bp', 'admin_projects_bp', 'ProjectDatabase']
