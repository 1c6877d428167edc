from flask import request
from . import contact_bp, admin_contacts_bp
from .database import ContactDatabase
from ..auth import require_admin
from ...core import APIError, LoggingService, api_response, get_json_body
from ...core.validation import as_text, get_validation_errors, CONTACT_RULES


def get_client_ip():
    """Get client IP address from request"""
    if request.headers.get('X-Forwarded-For'):
        return request.headers.get('X-Forwarded-For').split(',')[0].strip()
    return request.headers.get('X-Real-IP') or request.remote_addr


@contact_bp.route('', methods=['POST'])
def submit_contact():
    """Store a contact form submission"""
    data = get_json_body()
    fields = {
        key: as_text(data.get(key))
        for key in ('fullName', 'email', 'mobileNumber', 'city')
    }

    errors = get_validation_errors(fields, CONTACT_RULES)
    if errors:
        raise APIError(errors[0]['message'], 400)

    contact = ContactDatabase.create(
        fields['fullName'], fields['email'].lower(), fields['mobileNumber'], fields['city'],
        ip_address=get_client_ip()
    )

    LoggingService.info('contact', 'New contact submission', {'id': contact['id'], 'city': contact['city']})
    return api_response(
        'Thank you for contacting us! We will get back to you soon.',
        data=contact, status=201
    )


@admin_contacts_bp.route('', methods=['GET'])
@require_admin
def list_contacts():
    contacts = ContactDatabase.get_all()
    return api_response('Contact submissions retrieved successfully', data=contacts, count=len(contacts))


@admin_contacts_bp.route('/<int:contact_id>', methods=['DELETE'])
@require_admin
def delete_contact(contact_id):
    if not ContactDatabase.delete(contact_id):
        raise APIError('Contact submission not found', 404)

    LoggingService.log_user_action('contact', f"deleted contact {contact_id}")
    return api_response('Contact submission deleted successfully')
