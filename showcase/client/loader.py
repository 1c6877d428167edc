"""
Resource Loader
===============

The view-state controller behind every list section and admin page.

    IDLE --mount()--> LOADING --ok, items--> SUCCESS
                         |    --ok, none---> EMPTY
                         +----failure-----> ERROR --retry()--> LOADING

Each fetch is stamped with a generation number. A result arriving for an
older generation, or after unmount(), is dropped, so a slow stale response
never overwrites a newer one.
"""

import logging
import threading
from collections import namedtuple
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = 'Something went wrong. Please try again.'


class LoadStatus(Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    ERROR = 'error'
    EMPTY = 'empty'
    SUCCESS = 'success'


ViewState = namedtuple('ViewState', 'status data error')


def default_is_empty(data):
    return data is None or len(data) == 0


def error_message_for(exc, fallback):
    """Prefer the server-provided message, fall back to the generic one"""
    server_message = getattr(exc, 'server_message', None)
    return server_message or fallback


class ResourceLoader:
    def __init__(self, fetch, is_empty=None, error_message=DEFAULT_ERROR_MESSAGE,
                 on_error=None, on_change=None):
        self.fetch = fetch
        self.is_empty = is_empty or default_is_empty
        self.error_message = error_message
        self.on_error = on_error
        self.on_change = on_change
        self.retry_count = 0

        self._state = ViewState(LoadStatus.IDLE, None, None)
        self._generation = 0
        self._mounted = False
        self._lock = threading.Lock()

    @property
    def state(self):
        return self._state

    @property
    def status(self):
        return self._state.status

    @property
    def data(self):
        return self._state.data

    @property
    def error(self):
        return self._state.error

    def _notify(self, state):
        # Called with the lock released so on_change may re-enter the loader
        if self.on_change:
            self.on_change(state)

    def _begin(self):
        with self._lock:
            self._generation += 1
            # Keep the last data so a page can still show it while reloading
            self._state = state = ViewState(LoadStatus.LOADING, self._state.data, None)
            generation = self._generation
        self._notify(state)
        return generation

    def _is_current(self, generation):
        return self._mounted and generation == self._generation

    def _resolve(self, generation, data):
        with self._lock:
            if not self._is_current(generation):
                logger.debug("Discarding stale result for generation %s", generation)
                return False
            status = LoadStatus.EMPTY if self.is_empty(data) else LoadStatus.SUCCESS
            self._state = state = ViewState(status, data, None)
        self._notify(state)
        return True

    def _reject(self, generation, exc):
        with self._lock:
            if not self._is_current(generation):
                logger.debug("Discarding stale failure for generation %s: %s", generation, exc)
                return False
            message = error_message_for(exc, self.error_message)
            logger.info("Load failed: %s", exc)
            self._state = state = ViewState(LoadStatus.ERROR, None, message)

        self._notify(state)
        if self.on_error:
            self.on_error(message)
        return True

    def mount(self):
        """Start the first load"""
        self._mounted = True
        return self.load()

    def unmount(self):
        """Drop any result still in flight"""
        with self._lock:
            self._mounted = False
            self._generation += 1

    def load(self):
        """Fetch synchronously and settle. Returns the new state."""
        self._mounted = True
        generation = self._begin()
        try:
            data = self.fetch()
        except Exception as e:
            self._reject(generation, e)
        else:
            self._resolve(generation, data)
        return self._state

    def load_async(self, executor):
        """
        Fetch on an executor. Returns the future; state settles when it completes,
        unless a newer load or unmount() superseded it.
        """
        self._mounted = True
        generation = self._begin()
        future = executor.submit(self.fetch)

        def _settle(done):
            exc = done.exception()
            if exc is not None:
                self._reject(generation, exc)
            else:
                self._resolve(generation, done.result())

        future.add_done_callback(_settle)
        return future

    reload = load

    def retry(self):
        """Re-fetch after a failure. Does nothing unless the loader is in ERROR."""
        if self.status is not LoadStatus.ERROR:
            return self._state
        self.retry_count += 1
        return self.load()

    def render(self, loading, error, empty, ready):
        """
        Call exactly one view for the current state and return its result.

        error receives (message, retry); ready receives the data.
        """
        status = self.status
        if status in (LoadStatus.IDLE, LoadStatus.LOADING):
            return loading()
        if status is LoadStatus.ERROR:
            return error(self.error, self.retry)
        if status is LoadStatus.EMPTY:
            return empty()
        return ready(self.data)
