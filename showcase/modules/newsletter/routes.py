import logging
import sqlite3
from flask import request
from . import newsletter_bp, admin_subscriptions_bp
from .database import SubscriptionDatabase
from ..auth import require_admin
from ..contact.routes import get_client_ip
from ...core import APIError, LoggingService, api_response, get_json_body
from ...core.validation import as_text, get_validation_errors, validate_max_length, NEWSLETTER_RULES

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED = 'This email is already subscribed to our newsletter'


@newsletter_bp.route('/subscribe', methods=['POST'])
def subscribe():
    """Handle new subscription requests"""
    email = as_text(get_json_body().get('email')).lower()

    errors = get_validation_errors({'email': email}, NEWSLETTER_RULES)
    if errors:
        raise APIError(errors[0]['message'], 400)
    if not validate_max_length(email, 255):
        raise APIError('Please enter a valid email address', 400)

    existing = SubscriptionDatabase.get_by_email(email)
    if existing and existing['isActive']:
        raise APIError(ALREADY_SUBSCRIBED, 400)

    if existing:
        subscription = SubscriptionDatabase.reactivate(existing['id'])
        logger.info("Reactivated subscription %s", existing['id'])
        return api_response('Welcome back! Your subscription has been reactivated.', data=subscription)

    try:
        subscription = SubscriptionDatabase.create(
            email,
            ip_address=get_client_ip(),
            user_agent=request.headers.get('User-Agent', '')[:500]
        )
    except sqlite3.IntegrityError:
        # Lost a race with a concurrent subscribe for the same address
        raise APIError(ALREADY_SUBSCRIBED, 400)

    LoggingService.info('newsletter', 'New subscriber', {'id': subscription['id']})
    return api_response('Successfully subscribed to our newsletter!', data=subscription, status=201)


@admin_subscriptions_bp.route('', methods=['GET'])
@require_admin
def list_subscriptions():
    subscriptions = SubscriptionDatabase.get_all()
    return api_response('Subscriptions retrieved successfully', data=subscriptions, count=len(subscriptions))


@admin_subscriptions_bp.route('/<int:subscription_id>', methods=['DELETE'])
@require_admin
def delete_subscription(subscription_id):
    if not SubscriptionDatabase.delete(subscription_id):
        raise APIError('Subscription not found', 404)

    LoggingService.log_user_action('newsletter', f"deleted subscription {subscription_id}")
    return api_response('Subscription deleted successfully')
