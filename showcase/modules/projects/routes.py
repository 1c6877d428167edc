"""
Projects Routes
===============

Public:
- GET /api/projects

Admin (bearer token):
- GET /api/admin/projects
- POST /api/admin/projects (multipart: name, description, location?, image, crop box?)
- PUT /api/admin/projects/<id>
- DELETE /api/admin/projects/<id>
"""

from flask import request
from . import projects_bp, admin_projects_bp
from .database import ProjectDatabase
from ..auth import require_admin
from ...core import APIError, LoggingService, api_response
from ...core.storage import save_image, delete_image, parse_crop_box
from ...core.validation import get_validation_errors, PROJECT_RULES


SUBFOLDER = 'projects'


def _read_fields(form, partial=False):
    """Pull and validate the text fields from a multipart form"""
    fields = {}
    for key in ('name', 'description', 'location'):
        if key in form:
            fields[key] = form.get(key, '').strip()

    rules = PROJECT_RULES
    if partial:
        rules = {key: checks for key, checks in PROJECT_RULES.items() if key in fields}

    errors = get_validation_errors(fields, rules)
    if errors:
        raise APIError(errors[0]['message'], 400)

    if 'location' in fields:
        fields['location'] = fields['location'] or None
    return fields


@projects_bp.route('', methods=['GET'])
def list_projects():
    """Public project list"""
    projects = ProjectDatabase.get_all()
    return api_response('Projects retrieved successfully', data=projects, count=len(projects))


@admin_projects_bp.route('', methods=['GET'])
@require_admin
def admin_list_projects():
    projects = ProjectDatabase.get_all()
    return api_response('Projects retrieved successfully', data=projects, count=len(projects))


@admin_projects_bp.route('', methods=['POST'])
@require_admin
def create_project():
    fields = _read_fields(request.form)

    image = request.files.get('image')
    if not image or not image.filename:
        raise APIError('Project image is required', 400)

    image_url = save_image(image, SUBFOLDER, parse_crop_box(request.form))
    project = ProjectDatabase.create(
        fields['name'], fields['description'], image_url, fields.get('location')
    )

    LoggingService.log_user_action('projects', f"created project {project['id']}")
    return api_response('Project created successfully', data=project, status=201)


@admin_projects_bp.route('/<int:project_id>', methods=['PUT'])
@require_admin
def update_project(project_id):
    existing = ProjectDatabase.get(project_id)
    if not existing:
        raise APIError('Project not found', 404)

    fields = _read_fields(request.form, partial=True)

    image = request.files.get('image')
    if image and image.filename:
        fields['image_url'] = save_image(image, SUBFOLDER, parse_crop_box(request.form))

    project = ProjectDatabase.update(project_id, **fields)

    if 'image_url' in fields and existing['image'] != fields['image_url']:
        delete_image(existing['image'])

    LoggingService.log_user_action('projects', f"updated project {project_id}")
    return api_response('Project updated successfully', data=project)


@admin_projects_bp.route('/<int:project_id>', methods=['DELETE'])
@require_admin
def delete_project(project_id):
    existing = ProjectDatabase.get(project_id)
    if not existing or not ProjectDatabase.delete(project_id):
        raise APIError('Project not found', 404)

    delete_image(existing['image'])
    LoggingService.log_user_action('projects', f"deleted project {project_id}")
    return api_response('Project deleted successfully')
