"""
API Responses
=============

Every JSON response shares one envelope: {success, message, data?}.
Routes raise APIError; the handlers registered here turn it, and the
framework's own 404/405/413/500 errors, into that envelope.
"""

import traceback
from flask import jsonify, request, current_app
from werkzeug.exceptions import HTTPException
from .logging_service import LoggingService


class APIError(Exception):
    """An error with a user-facing message and an HTTP status"""

    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


def api_response(message=None, data=None, status=200, **extra):
    body = {'success': 200 <= status < 400}
    if message is not None:
        body['message'] = message
    if data is not None:
        body['data'] = data
    body.update(extra)
    return jsonify(body), status


def api_error(message, status=400):
    return jsonify({'success': False, 'message': message}), status


def get_json_body(allow_form=False):
    """
    The request's JSON object, or {} when there is none.

    allow_form falls back to form fields for non-JSON posts. Any JSON value
    other than an object is a 400.
    """
    data = request.get_json(silent=True)
    if data is None:
        return request.form if allow_form else {}
    if not isinstance(data, dict):
        raise APIError('Request body must be a JSON object', 400)
    return data


def register_error_handlers(app):
    """Install the envelope error handlers on a Flask app"""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        return api_error(error.message, error.status)

    @app.errorhandler(404)
    def handle_not_found(error):
        return api_error(f"Not found - {request.path}", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return api_error(f"Method {request.method} not allowed on {request.path}", 405)

    @app.errorhandler(413)
    def handle_too_large(error):
        limit = current_app.config.get('MAX_CONTENT_LENGTH')
        message = 'Uploaded file is too large'
        if limit:
            message = f"Uploaded file is too large (max {limit // (1024 * 1024)} MB)"
        return api_error(message, 413)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return api_error(error.description or error.name, error.code or 500)

        LoggingService.log_error_with_traceback('api', error, {'path': request.path})
        body = {'success': False, 'message': str(error) or 'Internal Server Error'}
        if current_app.debug:
            body['stack'] = traceback.format_exc()
        return jsonify(body), 500
