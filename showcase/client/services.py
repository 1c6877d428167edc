"""
Resource services - one per REST resource, one method per endpoint.

List calls return the `data` payload; mutations return the whole response
body so callers can show the server's message; deletes return None.
"""

from collections import namedtuple


class ImageUpload(namedtuple('ImageUpload', 'filename content content_type crop')):
    """
    An image to send with a create/update call.

    crop is an optional (x, y, width, height) box applied server-side.
    """

    def __new__(cls, filename, content, content_type='image/jpeg', crop=None):
        return super().__new__(cls, filename, content, content_type, crop)

    def form_fields(self):
        if not self.crop:
            return {}
        x, y, width, height = self.crop
        return {'cropX': x, 'cropY': y, 'cropWidth': width, 'cropHeight': height}

    def files(self):
        return {'image': (self.filename, self.content, self.content_type)}


def _multipart(fields, image=None):
    data = {key: value for key, value in fields.items() if value is not None}
    files = None
    if image is not None:
        data.update(image.form_fields())
        files = image.files()
    return data, files


def _unwrap(body):
    if isinstance(body, dict):
        return body.get('data')
    return body


class AuthService:
    def __init__(self, api):
        self.api = api

    def login(self, username, password):
        body = self.api.post('/auth/login', json={'username': username, 'password': password})
        token = body.get('token') if isinstance(body, dict) else None
        if token:
            self.api.session_context.set(token)
        return body

    def logout(self):
        self.api.session_context.clear()

    def is_authenticated(self):
        return self.api.session_context.is_authenticated()

    def get_token(self):
        return self.api.session_context.get()


class _ImageResourceService:
    """Shared shape of the project and client services"""

    public_path = None
    admin_path = None

    def __init__(self, api):
        self.api = api

    def _list_public(self):
        return _unwrap(self.api.get(self.public_path))

    def _list_admin(self):
        return _unwrap(self.api.get(self.admin_path))

    def _create(self, fields, image=None):
        data, files = _multipart(fields, image)
        return self.api.post(self.admin_path, data=data, files=files)

    def _update(self, record_id, fields, image=None):
        data, files = _multipart(fields, image)
        return self.api.put(f'{self.admin_path}/{record_id}', data=data, files=files)

    def _delete(self, record_id):
        self.api.delete(f'{self.admin_path}/{record_id}')


class ProjectService(_ImageResourceService):
    public_path = '/projects'
    admin_path = '/admin/projects'

    def get_all_projects(self):
        return self._list_public()

    def get_admin_projects(self):
        return self._list_admin()

    def create_project(self, fields, image=None):
        return self._create(fields, image)

    def update_project(self, project_id, fields, image=None):
        return self._update(project_id, fields, image)

    def delete_project(self, project_id):
        self._delete(project_id)


class ClientService(_ImageResourceService):
    public_path = '/clients'
    admin_path = '/admin/clients'

    def get_all_clients(self):
        return self._list_public()

    def get_admin_clients(self):
        return self._list_admin()

    def create_client(self, fields, image=None):
        return self._create(fields, image)

    def update_client(self, client_id, fields, image=None):
        return self._update(client_id, fields, image)

    def delete_client(self, client_id):
        self._delete(client_id)


class ContactService:
    def __init__(self, api):
        self.api = api

    def submit_contact(self, data):
        return self.api.post('/contact', json=data)

    def get_all_contacts(self):
        return _unwrap(self.api.get('/admin/contacts'))

    def delete_contact(self, contact_id):
        self.api.delete(f'/admin/contacts/{contact_id}')


class NewsletterService:
    def __init__(self, api):
        self.api = api

    def subscribe(self, email):
        return self.api.post('/newsletter/subscribe', json={'email': email})

    def get_all_subscriptions(self):
        return _unwrap(self.api.get('/admin/subscriptions'))

    def delete_subscription(self, subscription_id):
        self.api.delete(f'/admin/subscriptions/{subscription_id}')


class Services:
    """All resource services sharing one API client"""

    def __init__(self, api):
        self.api = api
        self.auth = AuthService(api)
        self.projects = ProjectService(api)
        self.clients = ClientService(api)
        self.contact = ContactService(api)
        self.newsletter = NewsletterService(api)
