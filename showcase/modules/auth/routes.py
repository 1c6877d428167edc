from . import auth_bp
from .database import AdminDatabase
from .tokens import create_token
from ...core import LoggingService, api_response, APIError, get_json_body
from ...core.validation import as_text


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange admin credentials for a bearer token"""
    data = get_json_body(allow_form=True)
    username = as_text(data.get('username'))
    password = data.get('password')
    password = '' if password is None else str(password)

    if not username or not password:
        raise APIError('Please provide username and password', 400)

    admin = AdminDatabase.authenticate(username, password)
    if not admin:
        LoggingService.log_security_event('Failed admin login', {'username': username})
        raise APIError('Invalid credentials', 401)

    LoggingService.log_user_action('auth', 'login', user_id=str(admin['id']))
    return api_response(
        'Login successful',
        data={'id': admin['id'], 'username': admin['username']},
        token=create_token(admin)
    )
