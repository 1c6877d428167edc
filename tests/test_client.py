"""
Client-side tests: API client, session, services, toasts, the resource
loader and the admin guard. No server is involved; HTTP is mocked.
"""

import json
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
import requests

from showcase.client import (
    ApiClient,
    ApiError,
    LocalStorage,
    SessionContext,
    Services,
    ImageUpload,
    ToastStore,
    ResourceLoader,
    LoadStatus,
    ProtectedRoute,
    create_services,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def _response(status=200, body=None, text=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    if body is not None:
        resp.content = json.dumps(body).encode()
        resp.json.return_value = body
    elif text is not None:
        resp.content = text.encode()
        resp.text = text
        resp.json.side_effect = ValueError("not json")
    else:
        resp.content = b""
    return resp


@pytest.fixture
def session():
    return SessionContext(LocalStorage())


@pytest.fixture
def http():
    http = MagicMock()
    http.request.return_value = _response(body={"success": True, "data": []})
    return http


@pytest.fixture
def api(session, http):
    return ApiClient(session, base_url="http://api.test/api/", http=http)


@pytest.fixture
def services(api):
    return Services(api)


class ManualExecutor:
    """Executor whose futures are settled by the test, in any order."""

    def __init__(self):
        self.futures = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.futures.append(future)
        return future


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

def test_session_roundtrip(session):
    assert session.is_authenticated() is False
    session.set("abc")
    assert session.get() == "abc"
    assert session.is_authenticated() is True
    session.clear()
    assert session.get() is None
    assert session.is_authenticated() is False


def test_local_storage_persists_to_file(tmp_path):
    path = tmp_path / "state" / "storage.json"
    SessionContext(LocalStorage(str(path))).set("persisted")

    assert json.loads(path.read_text()) == {"token": "persisted"}
    assert SessionContext(LocalStorage(str(path))).get() == "persisted"


def test_local_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")
    assert LocalStorage(str(path)).get_item("token") is None


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

def test_request_builds_url_and_returns_body(api, http):
    body = api.get("/projects")
    assert body == {"success": True, "data": []}

    method, url = http.request.call_args[0]
    assert (method, url) == ("GET", "http://api.test/api/projects")
    assert "Authorization" not in http.request.call_args[1]["headers"]


def test_request_attaches_bearer_token(api, http, session):
    session.set("tok123")
    api.post("/admin/projects", data={"name": "x"})
    assert http.request.call_args[1]["headers"]["Authorization"] == "Bearer tok123"


def test_error_response_raises_with_server_message(api, http):
    http.request.return_value = _response(401, {"success": False, "message": "Not authorized, no token"})

    with pytest.raises(ApiError) as exc:
        api.get("/admin/contacts")
    assert exc.value.status == 401
    assert exc.value.server_message == "Not authorized, no token"
    assert str(exc.value) == "Not authorized, no token"


def test_error_response_without_body(api, http):
    http.request.return_value = _response(502, text="Bad Gateway")

    with pytest.raises(ApiError) as exc:
        api.get("/projects")
    assert exc.value.status == 502
    assert exc.value.server_message is None
    assert exc.value.message == "Request failed with status code 502"


def test_transport_failure_raises_api_error(api, http):
    http.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(ApiError) as exc:
        api.get("/projects")
    assert exc.value.status is None
    assert exc.value.server_message is None
    assert "connection refused" in exc.value.message


def test_empty_body_parses_to_none(api, http):
    http.request.return_value = _response(204)
    assert api.delete("/admin/contacts/1") is None


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

def test_login_stores_token(services, http, session):
    http.request.return_value = _response(body={"success": True, "token": "jwt-token", "data": {"id": 1}})

    services.auth.login("admin", "pw")

    assert http.request.call_args[1]["json"] == {"username": "admin", "password": "pw"}
    assert session.get() == "jwt-token"
    assert services.auth.is_authenticated() is True
    assert services.auth.get_token() == "jwt-token"

    services.auth.logout()
    assert services.auth.is_authenticated() is False


def test_failed_login_leaves_session_empty(services, http, session):
    http.request.return_value = _response(401, {"success": False, "message": "Invalid credentials"})
    with pytest.raises(ApiError):
        services.auth.login("admin", "bad")
    assert session.get() is None


def test_list_calls_unwrap_data(services, http):
    http.request.return_value = _response(body={"success": True, "data": [{"id": 1}], "count": 1})
    assert services.projects.get_all_projects() == [{"id": 1}]
    assert http.request.call_args[0][1].endswith("/api/projects")

    services.clients.get_admin_clients()
    assert http.request.call_args[0][1].endswith("/api/admin/clients")

    services.newsletter.get_all_subscriptions()
    assert http.request.call_args[0][1].endswith("/api/admin/subscriptions")


def test_create_project_sends_multipart_with_crop(services, http):
    http.request.return_value = _response(201, {"success": True, "message": "Project created successfully"})
    image = ImageUpload("tower.png", b"png-bytes", "image/png", crop=(1, 2, 30, 40))

    body = services.projects.create_project({"name": "A", "description": "B", "location": None}, image)

    assert body["message"] == "Project created successfully"
    kwargs = http.request.call_args[1]
    assert kwargs["data"] == {
        "name": "A", "description": "B",
        "cropX": 1, "cropY": 2, "cropWidth": 30, "cropHeight": 40,
    }
    assert kwargs["files"] == {"image": ("tower.png", b"png-bytes", "image/png")}


def test_update_client_without_image(services, http):
    services.clients.update_client(7, {"designation": "CTO"})
    method, url = http.request.call_args[0]
    assert (method, url) == ("PUT", "http://api.test/api/admin/clients/7")
    assert http.request.call_args[1]["files"] is None


def test_delete_and_submit_paths(services, http):
    services.contact.delete_contact(3)
    assert http.request.call_args[0] == ("DELETE", "http://api.test/api/admin/contacts/3")

    services.newsletter.subscribe("a@b.co")
    assert http.request.call_args[0][1] == "http://api.test/api/newsletter/subscribe"
    assert http.request.call_args[1]["json"] == {"email": "a@b.co"}


def test_create_services_shares_one_session(tmp_path):
    services = create_services("http://api.test/api", str(tmp_path / "s.json"), http=MagicMock())
    services.api.session_context.set("t")
    assert services.auth.get_token() == "t"
    assert services.projects.api is services.newsletter.api


# ---------------------------------------------------------------------------
# Toasts
# ---------------------------------------------------------------------------

def test_toasts_ordered_with_unique_ids():
    store = ToastStore(clock=lambda: 1000.0)
    first = store.success("saved")
    second = store.error("failed")
    third = store.info("fyi")

    assert first < second < third
    assert [(t.type, t.message) for t in store.toasts] == [
        ("success", "saved"), ("error", "failed"), ("info", "fyi"),
    ]


def test_hide_removes_only_that_toast():
    store = ToastStore()
    keep = store.warning("careful")
    drop = store.success("done")

    store.hide(drop)
    assert [t.id for t in store.toasts] == [keep]
    store.hide(12345)
    assert len(store.toasts) == 1


def test_toast_max_length_drops_oldest():
    store = ToastStore(max_length=2)
    for n in range(4):
        store.info(f"toast {n}")
    assert [t.message for t in store.toasts] == ["toast 2", "toast 3"]


def test_unknown_toast_type_rejected():
    with pytest.raises(ValueError):
        ToastStore().show("fatal", "nope")


def test_toasts_returns_a_copy():
    store = ToastStore()
    store.success("x")
    store.toasts.clear()
    assert len(store.toasts) == 1


# ---------------------------------------------------------------------------
# Resource loader
# ---------------------------------------------------------------------------

def test_loader_success_and_empty():
    loader = ResourceLoader(lambda: [1, 2])
    assert loader.status is LoadStatus.IDLE
    loader.mount()
    assert loader.status is LoadStatus.SUCCESS
    assert loader.data == [1, 2]

    empty = ResourceLoader(lambda: [])
    empty.mount()
    assert empty.status is LoadStatus.EMPTY


def test_loader_error_prefers_server_message():
    def fetch():
        raise ApiError("Request failed", status=500, payload={"message": "Database unavailable"})

    errors = []
    loader = ResourceLoader(fetch, error_message="Failed to load projects.", on_error=errors.append)
    loader.mount()

    assert loader.status is LoadStatus.ERROR
    assert loader.error == "Database unavailable"
    assert errors == ["Database unavailable"]


def test_loader_error_falls_back_to_generic_message():
    def fetch():
        raise ApiError("connection refused")

    loader = ResourceLoader(fetch, error_message="Failed to load projects.")
    loader.mount()
    assert loader.error == "Failed to load projects."


def test_retry_only_from_error():
    results = [RuntimeError("down"), ["ok"]]

    def fetch():
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    loader = ResourceLoader(fetch)
    loader.mount()
    assert loader.status is LoadStatus.ERROR

    loader.retry()
    assert loader.status is LoadStatus.SUCCESS
    assert loader.retry_count == 1

    # Not in ERROR: nothing is fetched
    loader.retry()
    assert loader.retry_count == 1


def test_render_calls_exactly_one_view():
    loader = ResourceLoader(lambda: ["a"])
    views = dict(
        loading=lambda: "loading",
        error=lambda message, retry: ("error", message),
        empty=lambda: "empty",
        ready=lambda data: ("ready", data),
    )
    assert loader.render(**views) == "loading"
    loader.mount()
    assert loader.render(**views) == ("ready", ["a"])


def test_render_error_passes_retry():
    loader = ResourceLoader(MagicMock(side_effect=[RuntimeError("x"), []]), error_message="oops")
    loader.mount()

    message, retry = loader.render(
        loading=lambda: None, empty=lambda: None, ready=lambda d: None,
        error=lambda message, retry: (message, retry),
    )
    assert message == "oops"
    retry()
    assert loader.status is LoadStatus.EMPTY


def test_stale_response_discarded():
    executor = ManualExecutor()
    loader = ResourceLoader(lambda: None)

    loader.load_async(executor)
    loader.load_async(executor)
    old, new = executor.futures

    new.set_result(["fresh"])
    assert loader.data == ["fresh"]

    # The first request finishes last; its data must not win
    old.set_result(["stale"])
    assert loader.data == ["fresh"]
    assert loader.status is LoadStatus.SUCCESS


def test_stale_failure_discarded():
    executor = ManualExecutor()
    loader = ResourceLoader(lambda: None)

    loader.load_async(executor)
    loader.load_async(executor)
    old, new = executor.futures

    new.set_result(["fresh"])
    old.set_exception(RuntimeError("late failure"))
    assert loader.status is LoadStatus.SUCCESS


def test_result_after_unmount_ignored():
    executor = ManualExecutor()
    changes = []
    loader = ResourceLoader(lambda: None, on_change=changes.append)

    loader.load_async(executor)
    loader.unmount()
    executor.futures[0].set_result(["late"])

    assert loader.status is LoadStatus.LOADING
    assert [state.status for state in changes] == [LoadStatus.LOADING]


def test_on_change_can_retry_from_error():
    fetch = MagicMock(side_effect=[RuntimeError("down"), ["back"]])
    seen = []

    def on_change(state):
        seen.append(state.status)
        if state.status is LoadStatus.ERROR:
            loader.retry()

    loader = ResourceLoader(fetch, on_change=on_change)

    # Run off the main thread so a lock held during on_change fails the test instead of hanging it
    worker = threading.Thread(target=loader.mount, daemon=True)
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert loader.status is LoadStatus.SUCCESS
    assert loader.data == ["back"]
    assert loader.retry_count == 1
    assert seen == [LoadStatus.LOADING, LoadStatus.ERROR, LoadStatus.LOADING, LoadStatus.SUCCESS]


def test_load_async_on_thread_pool():
    done = threading.Event()
    loader = ResourceLoader(lambda: ["x"], on_change=lambda s: s.status is LoadStatus.SUCCESS and done.set())

    with ThreadPoolExecutor(max_workers=1) as pool:
        loader.load_async(pool).result(timeout=5)

    assert done.wait(5)
    assert loader.data == ["x"]


# ---------------------------------------------------------------------------
# Guard
# ---------------------------------------------------------------------------

def test_guard_redirects_without_token(session):
    navigate = MagicMock()
    guard = ProtectedRoute(session, navigate)

    assert guard.render(lambda: "admin page") is None
    navigate.assert_called_once_with("/login", replace=True)


def test_guard_renders_children_with_token(session):
    navigate = MagicMock()
    session.set("any-token")

    assert ProtectedRoute(session, navigate).render(lambda: "admin page") == "admin page"
    navigate.assert_not_called()
