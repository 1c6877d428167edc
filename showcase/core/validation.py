"""
Validation utility functions for form inputs.
Shared by the client-side form controllers and the server routes.
"""

import re

EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
MOBILE_REGEX = re.compile(r'^\d{10,15}$')
MOBILE_SEPARATORS = re.compile(r'[\s-]')


def validate_email(email):
    if not email:
        return False
    return EMAIL_REGEX.match(email) is not None


def validate_required(value):
    return bool(value and value.strip())


def validate_mobile_number(mobile):
    """Mobile numbers are 10-15 digits once spaces and dashes are removed"""
    if not mobile:
        return False
    return MOBILE_REGEX.match(MOBILE_SEPARATORS.sub('', mobile)) is not None


def validate_max_length(value, max_length):
    return len(value or '') <= max_length


def as_text(value):
    """Coerce a submitted field to a stripped string; None becomes ''"""
    if value is None:
        return ''
    return str(value).strip()


def rule(check, message):
    """Wrap a boolean validator into a rule returning True or an error message"""
    def _rule(value):
        return True if check(value) else message
    return _rule


def get_validation_errors(data, rules):
    """
    Apply ordered rules per field, reporting only the first failure.

    Args:
        data (dict): field name -> value
        rules (dict): field name -> list of callables returning True or a message

    Returns:
        list of {'field', 'message'} dicts, in the order of `rules`
    """
    errors = []

    for field, field_rules in rules.items():
        value = data.get(field) or ''
        for check in field_rules:
            result = check(value)
            if result is not True:
                errors.append({
                    'field': field,
                    'message': result if isinstance(result, str) else f'{field} is invalid',
                })
                break

    return errors


CONTACT_RULES = {
    'fullName': [rule(validate_required, 'Full name is required')],
    'email': [
        rule(validate_required, 'Email is required'),
        rule(validate_email, 'Please enter a valid email address'),
    ],
    'mobileNumber': [
        rule(validate_required, 'Mobile number is required'),
        rule(validate_mobile_number, 'Please enter a valid mobile number'),
    ],
    'city': [rule(validate_required, 'City is required')],
}

NEWSLETTER_RULES = {
    'email': [
        rule(validate_required, 'Email is required'),
        rule(validate_email, 'Please enter a valid email address'),
    ],
}

PROJECT_RULES = {
    'name': [rule(validate_required, 'Project name is required')],
    'description': [rule(validate_required, 'Project description is required')],
}

CLIENT_RULES = {
    'name': [rule(validate_required, 'Client name is required')],
    'description': [rule(validate_required, 'Client description is required')],
    'designation': [rule(validate_required, 'Client designation is required')],
}
