"""
Clients Routes
==============

Public:
- GET /api/clients

Admin (bearer token):
- GET /api/admin/clients
- POST /api/admin/clients (multipart: name, designation, description, image, crop box?)
- PUT /api/admin/clients/<id>
- DELETE /api/admin/clients/<id>
"""

from flask import request
from . import clients_bp, admin_clients_bp
from .database import ClientDatabase
from ..auth import require_admin
from ...core import APIError, LoggingService, api_response
from ...core.storage import save_image, delete_image, parse_crop_box
from ...core.validation import get_validation_errors, CLIENT_RULES

SUBFOLDER = 'clients'


def _read_fields(form, partial=False):
    fields = {}
    for key in ('name', 'designation', 'description'):
        if key in form:
            fields[key] = form.get(key, '').strip()

    rules = CLIENT_RULES
    if partial:
        rules = {key: checks for key, checks in CLIENT_RULES.items() if key in fields}

    errors = get_validation_errors(fields, rules)
    if errors:
        raise APIError(errors[0]['message'], 400)
    return fields


@clients_bp.route('', methods=['GET'])
def list_clients():
    """Public testimonial list"""
    clients = ClientDatabase.get_all()
    return api_response('Clients retrieved successfully', data=clients, count=len(clients))


@admin_clients_bp.route('', methods=['GET'])
@require_admin
def admin_list_clients():
    clients = ClientDatabase.get_all()
    return api_response('Clients retrieved successfully', data=clients, count=len(clients))


@admin_clients_bp.route('', methods=['POST'])
@require_admin
def create_client():
    fields = _read_fields(request.form)

    image = request.files.get('image')
    if not image or not image.filename:
        raise APIError('Client image is required', 400)

    image_url = save_image(image, SUBFOLDER, parse_crop_box(request.form))
    client = ClientDatabase.create(
        fields['name'], fields['designation'], fields['description'], image_url
    )

    LoggingService.log_user_action('clients', f"created client {client['id']}")
    return api_response('Client created successfully', data=client, status=201)


@admin_clients_bp.route('/<int:client_id>', methods=['PUT'])
@require_admin
def update_client(client_id):
    existing = ClientDatabase.get(client_id)
    if not existing:
        raise APIError('Client not found', 404)

    fields = _read_fields(request.form, partial=True)

    image = request.files.get('image')
    if image and image.filename:
        fields['image_url'] = save_image(image, SUBFOLDER, parse_crop_box(request.form))

    client = ClientDatabase.update(client_id, **fields)

    if 'image_url' in fields and existing['image'] != fields['image_url']:
        delete_image(existing['image'])

    LoggingService.log_user_action('clients', f"updated client {client_id}")
    return api_response('Client updated successfully', data=client)


@admin_clients_bp.route('/<int:client_id>', methods=['DELETE'])
@require_admin
def delete_client(client_id):
    existing = ClientDatabase.get(client_id)
    if not existing or not ClientDatabase.delete(client_id):
        raise APIError('Client not found', 404)

    delete_image(existing['image'])
    LoggingService.log_user_action('clients', f"deleted client {client_id}")
    return api_response('Client deleted successfully')
