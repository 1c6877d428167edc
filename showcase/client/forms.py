"""
Form controllers for the public and admin forms.

Each form keeps its field values and per-field errors, validates
synchronously on submit (first failing rule per field), and reports the
outcome through the toast store. Server errors are toasted, never raised.
"""

import logging
from ..core.validation import (
    get_validation_errors,
    CONTACT_RULES,
    NEWSLETTER_RULES,
    PROJECT_RULES,
    CLIENT_RULES,
)
from .loader import error_message_for

logger = logging.getLogger(__name__)


class Form:
    fields = ()
    rules = {}
    success_message = None
    failure_message = 'Something went wrong. Please try again.'

    def __init__(self, toast):
        self.toast = toast
        self.values = {name: '' for name in self.fields}
        self.errors = {}
        self.is_submitting = False

    def set(self, field, value):
        """Update a field and clear its error, as typing does"""
        if field not in self.values:
            raise KeyError(field)
        self.values[field] = value
        self.errors.pop(field, None)

    def reset(self):
        self.values = {name: '' for name in self.fields}
        self.errors = {}

    def validate(self):
        self.errors = {
            error['field']: error['message']
            for error in get_validation_errors(self.values, self.rules)
        }
        return not self.errors

    def send(self):
        raise NotImplementedError

    def on_success(self, body):
        message = body.get('message') if isinstance(body, dict) else None
        self.reset()
        self.toast.success(message or self.success_message)

    def on_failure(self, exc):
        message = error_message_for(exc, None) or str(exc) or self.failure_message
        self.toast.error(message)

    def submit(self):
        """Validate and send. Returns True when the server accepted the form."""
        if not self.validate():
            return False

        self.is_submitting = True
        try:
            body = self.send()
        except Exception as e:
            logger.info("%s submit failed: %s", type(self).__name__, e)
            self.on_failure(e)
            return False
        else:
            self.on_success(body)
            return True
        finally:
            self.is_submitting = False


class ContactForm(Form):
    fields = ('fullName', 'email', 'mobileNumber', 'city')
    rules = CONTACT_RULES
    success_message = 'Thank you for contacting us! We will get back to you soon.'
    failure_message = 'Failed to submit contact form. Please try again.'

    def __init__(self, contact_service, toast):
        super().__init__(toast)
        self.contact_service = contact_service

    def send(self):
        return self.contact_service.submit_contact(dict(self.values))


class NewsletterForm(Form):
    fields = ('email',)
    rules = NEWSLETTER_RULES
    success_message = 'Thank you for subscribing to our newsletter!'
    failure_message = 'Failed to subscribe. Please try again.'

    def __init__(self, newsletter_service, toast):
        super().__init__(toast)
        self.newsletter_service = newsletter_service

    @property
    def error(self):
        return self.errors.get('email', '')

    def send(self):
        return self.newsletter_service.subscribe(self.values['email'])


class LoginForm(Form):
    fields = ('username', 'password')
    failure_message = 'Invalid credentials. Please try again.'

    def __init__(self, auth_service, navigate):
        super().__init__(toast=None)
        self.auth_service = auth_service
        self.navigate = navigate
        self.error = ''

    def send(self):
        return self.auth_service.login(self.values['username'], self.values['password'])

    def submit(self):
        self.error = ''
        return super().submit()

    def on_success(self, body):
        self.navigate('/admin')

    def on_failure(self, exc):
        # Only a server-provided message is shown; transport errors get the fallback
        self.error = error_message_for(exc, self.failure_message)


class ImageRecordForm(Form):
    """
    Shared create/edit form of the project and client admin pages.

    An image is required when creating and optional when editing.
    """

    entity = None
    image_types = ('image/png', 'image/jpeg', 'image/gif', 'image/webp')

    def __init__(self, toast):
        super().__init__(toast)
        self.image = None
        self.editing = None

    @property
    def success_message(self):
        action = 'updated' if self.editing else 'created'
        return f'{self.entity} {action} successfully!'

    @property
    def failure_message(self):
        return f'Failed to save {self.entity.lower()}'

    def select_image(self, image):
        """Attach an ImageUpload. Returns False if it is not an image."""
        if not image.content_type or not image.content_type.startswith('image/'):
            self.errors['image'] = 'Please select a valid image file'
            return False
        self.image = image
        self.errors.pop('image', None)
        return True

    def start_edit(self, record):
        self.editing = record
        self.values = {name: record.get(name) or '' for name in self.fields}
        self.errors = {}
        self.image = None

    def cancel_edit(self):
        self.editing = None
        self.reset()

    def reset(self):
        super().reset()
        self.image = None

    def validate(self):
        super().validate()
        if not self.editing and self.image is None and 'image' not in self.errors:
            self.errors['image'] = f'{self.entity} image is required'
        return not self.errors

    def payload(self):
        return {name: self.values[name].strip() for name in self.fields}

    def on_success(self, body):
        # Toast the local message, as the admin pages always did
        message = self.success_message
        self.editing = None
        self.reset()
        self.toast.success(message)

    def on_failure(self, exc):
        self.toast.error(error_message_for(exc, self.failure_message))


class ProjectForm(ImageRecordForm):
    fields = ('name', 'description', 'location')
    rules = PROJECT_RULES
    entity = 'Project'

    def __init__(self, project_service, toast):
        super().__init__(toast)
        self.project_service = project_service

    def payload(self):
        data = super().payload()
        if not data['location']:
            del data['location']
        return data

    def send(self):
        if self.editing:
            return self.project_service.update_project(self.editing['id'], self.payload(), self.image)
        return self.project_service.create_project(self.payload(), self.image)


class ClientForm(ImageRecordForm):
    fields = ('name', 'designation', 'description')
    rules = CLIENT_RULES
    entity = 'Client'

    def __init__(self, client_service, toast):
        super().__init__(toast)
        self.client_service = client_service

    def send(self):
        if self.editing:
            return self.client_service.update_client(self.editing['id'], self.payload(), self.image)
        return self.client_service.create_client(self.payload(), self.image)
