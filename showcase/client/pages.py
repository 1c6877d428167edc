"""
Page and section controllers.

Each one owns a ResourceLoader (and, for admin pages, a guard, a toast
store and a form) and renders a plain view model: a dict whose 'view' key
is one of 'loading', 'error', 'empty', 'list' (or 'redirect' when the
guard turned the visitor away).
"""

from .admin import (
    filter_contacts,
    filter_subscriptions,
    subscriptions_to_csv,
    export_filename,
)
from .forms import ProjectForm, ClientForm, ContactForm, NewsletterForm, LoginForm
from .guard import ProtectedRoute
from .loader import ResourceLoader, error_message_for
from .toast import ToastStore


def _always(*args, **kwargs):
    return True


class ListSection:
    """A public landing-page section: heading plus a loaded list"""

    title = None
    loading_message = 'Loading...'
    error_title = None
    error_message = None
    empty_title = None
    empty_message = None

    def __init__(self, fetch):
        self.loader = ResourceLoader(fetch, error_message=self.error_message)

    def mount(self):
        return self.loader.mount()

    def unmount(self):
        self.loader.unmount()

    def retry(self):
        return self.loader.retry()

    def render(self):
        return self.loader.render(
            loading=lambda: {'view': 'loading', 'title': self.title, 'message': self.loading_message},
            error=lambda message, retry: {
                'view': 'error', 'title': self.title, 'error_title': self.error_title,
                'message': message, 'retry': retry,
            },
            empty=lambda: {
                'view': 'empty', 'title': self.title,
                'empty_title': self.empty_title, 'message': self.empty_message,
            },
            ready=lambda items: {'view': 'list', 'title': self.title, 'items': items},
        )


class ProjectsSection(ListSection):
    title = 'Our Projects'
    loading_message = 'Loading projects...'
    error_title = 'Failed to Load Projects'
    error_message = 'Failed to load projects. Please try again later.'
    empty_title = 'No Projects Yet'
    empty_message = 'No projects available at the moment. Check back soon!'

    def __init__(self, services):
        super().__init__(services.projects.get_all_projects)


class HappyClientsSection(ListSection):
    title = 'Happy Clients'
    loading_message = 'Loading client testimonials...'
    error_title = 'Failed to Load Client Testimonials'
    error_message = 'Failed to load client testimonials. Please try again later.'
    empty_title = 'No Client Testimonials Yet'
    empty_message = 'No client testimonials available at the moment. Check back soon!'

    def __init__(self, services):
        super().__init__(services.clients.get_all_clients)


class LandingPage:
    """Public home page: projects, testimonials, contact form and newsletter"""

    def __init__(self, services, toast=None):
        self.toast = toast or ToastStore()
        self.projects = ProjectsSection(services)
        self.clients = HappyClientsSection(services)
        self.contact_form = ContactForm(services.contact, self.toast)
        self.newsletter_form = NewsletterForm(services.newsletter, self.toast)

    def mount(self):
        self.projects.mount()
        self.clients.mount()

    def render(self):
        return {
            'projects': self.projects.render(),
            'clients': self.clients.render(),
            'toasts': self.toast.toasts,
        }


class LoginPage:
    def __init__(self, services, navigate):
        self.form = LoginForm(services.auth, navigate)

    def submit(self, username, password):
        self.form.set('username', username)
        self.form.set('password', password)
        return self.form.submit()

    @property
    def error(self):
        return self.form.error


class AdminLayout:
    """Navigation shell shared by the admin pages"""

    def __init__(self, services, navigate):
        self.services = services
        self.navigate = navigate

    def logout(self):
        self.services.auth.logout()
        self.navigate('/')


class AdminPage:
    """
    Guarded admin list page.

    Load failures are toasted and shown; delete failures are toasted and kept
    in error_banner. Subclasses name the fetch/delete calls and messages.
    """

    entity = None
    fetch_error = None
    delete_error = None
    delete_success = None
    empty_message = None

    def __init__(self, services, navigate, toast=None, confirm=None):
        self.services = services
        self.toast = toast or ToastStore()
        self.confirm = confirm or _always
        self.guard = ProtectedRoute(services.api.session_context, navigate)
        self.layout = AdminLayout(services, navigate)
        self.error_banner = None
        self.loader = ResourceLoader(
            self.fetch,
            error_message=self.fetch_error,
            on_error=self.toast.error,
        )

    def fetch(self):
        raise NotImplementedError

    def remove(self, record_id):
        raise NotImplementedError

    def mount(self):
        """Load only when the guard lets the visitor in"""
        if not self.guard.is_allowed():
            self.guard.render(lambda: None)
            return None
        return self.loader.mount()

    def unmount(self):
        self.loader.unmount()

    def delete(self, record_id):
        if not self.confirm(f'Are you sure you want to delete this {self.entity}?'):
            return False
        try:
            self.remove(record_id)
        except Exception as e:
            message = error_message_for(e, self.delete_error)
            self.error_banner = message
            self.toast.error(message)
            return False

        self.toast.success(self.delete_success)
        self.loader.reload()
        return True

    def items(self):
        return self.loader.data or []

    def render_list(self, items):
        return {'view': 'list', 'items': items}

    def render_empty(self):
        return {'view': 'empty', 'message': self.empty_message}

    def render(self):
        return self.guard.render(lambda: self.loader.render(
            loading=lambda: {'view': 'loading'},
            error=lambda message, retry: {'view': 'error', 'message': message, 'retry': retry},
            empty=self.render_empty,
            ready=self.render_list,
        )) or {'view': 'redirect'}


class _AdminFormPage(AdminPage):
    form_class = None

    def __init__(self, services, navigate, toast=None, confirm=None):
        super().__init__(services, navigate, toast, confirm)
        self.form = self.form_class(self.service(), self.toast)

    def service(self):
        raise NotImplementedError

    def save(self):
        """Submit the create/edit form; refresh the list on success"""
        saved = self.form.submit()
        if saved:
            self.loader.reload()
        return saved

    def start_edit(self, record):
        self.form.start_edit(record)

    def cancel_edit(self):
        self.form.cancel_edit()


class AdminProjectsPage(_AdminFormPage):
    entity = 'project'
    form_class = ProjectForm
    fetch_error = 'Failed to fetch projects'
    delete_error = 'Failed to delete project'
    delete_success = 'Project deleted successfully!'
    empty_message = 'No projects yet. Add your first project above.'

    def service(self):
        return self.services.projects

    def fetch(self):
        return self.services.projects.get_admin_projects()

    def remove(self, record_id):
        self.services.projects.delete_project(record_id)


class AdminClientsPage(_AdminFormPage):
    entity = 'client'
    form_class = ClientForm
    fetch_error = 'Failed to fetch clients'
    delete_error = 'Failed to delete client'
    delete_success = 'Client deleted successfully!'
    empty_message = 'No clients yet. Add your first client above.'

    def service(self):
        return self.services.clients

    def fetch(self):
        return self.services.clients.get_admin_clients()

    def remove(self, record_id):
        self.services.clients.delete_client(record_id)


class _SearchablePage(AdminPage):
    noun = None

    def __init__(self, services, navigate, toast=None, confirm=None):
        super().__init__(services, navigate, toast, confirm)
        self.search_term = ''

    def search(self, term):
        self.search_term = term

    def clear_search(self):
        self.search_term = ''

    def filter(self, items, term):
        raise NotImplementedError

    @property
    def visible(self):
        return self.filter(self.items(), self.search_term)

    def render_empty(self):
        return {'view': 'empty', 'message': f'No {self.noun} yet.'}

    def render_list(self, items):
        visible = self.filter(items, self.search_term)
        if not visible:
            return {'view': 'empty', 'message': f'No {self.noun} match your search.'}
        return {
            'view': 'list',
            'items': visible,
            'summary': f'Showing {len(visible)} of {len(items)} {self.noun.split()[-1]}',
        }


class AdminContactsPage(_SearchablePage):
    entity = 'contact submission'
    noun = 'contact submissions'
    fetch_error = 'Failed to fetch contact submissions'
    delete_error = 'Failed to delete contact submission'
    delete_success = 'Contact submission deleted successfully!'

    def fetch(self):
        return self.services.contact.get_all_contacts()

    def remove(self, record_id):
        self.services.contact.delete_contact(record_id)

    def filter(self, items, term):
        return filter_contacts(items, term)


class AdminSubscriptionsPage(_SearchablePage):
    entity = 'subscription'
    noun = 'newsletter subscriptions'
    fetch_error = 'Failed to fetch subscriptions'
    delete_error = 'Failed to delete subscription'
    delete_success = 'Subscription deleted successfully!'

    def fetch(self):
        return self.services.newsletter.get_all_subscriptions()

    def remove(self, record_id):
        self.services.newsletter.delete_subscription(record_id)

    def filter(self, items, term):
        return filter_subscriptions(items, term)

    def export_csv(self, today=None):
        """Returns (filename, csv text) for the currently visible subscriptions"""
        return export_filename(today), subscriptions_to_csv(self.visible)
