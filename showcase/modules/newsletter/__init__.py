"""
Newsletter Module
=================

Provides:
- Public subscribe API (/api/newsletter/subscribe)
- Admin list and delete of subscriptions (/api/admin/subscriptions)
"""

from flask import Blueprint

newsletter_bp = Blueprint('newsletter', __name__, url_prefix='/api/newsletter')
admin_subscriptions_bp = Blueprint('admin_subscriptions', __name__, url_prefix='/api/admin/subscriptions')

from . import routes
from .database import SubscriptionDatabase

__all__ = ['newsletter_bp', 'admin_subscriptions_bp', 'SubscriptionDatabase']
