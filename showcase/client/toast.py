"""
Toast notifications: an ordered, in-memory list of transient messages.
"""

import threading
import time
from collections import namedtuple

Toast = namedtuple('Toast', 'id type message')

TOAST_TYPES = ('success', 'error', 'info', 'warning')


class ToastStore:
    """
    Append-at-tail, dismiss-by-id toast queue.

    Ids are the current time in milliseconds, bumped when two toasts land in
    the same millisecond. max_length=None keeps every toast; otherwise the
    oldest are dropped once the queue is full.
    """

    def __init__(self, max_length=None, clock=None):
        self.max_length = max_length
        self._clock = clock or time.time
        self._toasts = []
        self._last_id = 0
        self._lock = threading.Lock()

    @property
    def toasts(self):
        with self._lock:
            return list(self._toasts)

    def _next_id(self):
        toast_id = int(self._clock() * 1000)
        if toast_id <= self._last_id:
            toast_id = self._last_id + 1
        self._last_id = toast_id
        return toast_id

    def show(self, toast_type, message):
        if toast_type not in TOAST_TYPES:
            raise ValueError(f"Unknown toast type: {toast_type}")

        with self._lock:
            toast = Toast(self._next_id(), toast_type, message)
            self._toasts.append(toast)
            if self.max_length is not None and len(self._toasts) > self.max_length:
                del self._toasts[:len(self._toasts) - self.max_length]
            return toast.id

    def hide(self, toast_id):
        with self._lock:
            self._toasts = [toast for toast in self._toasts if toast.id != toast_id]

    def success(self, message):
        return self.show('success', message)

    def error(self, message):
        return self.show('error', message)

    def info(self, message):
        return self.show('info', message)

    def warning(self, message):
        return self.show('warning', message)

    def clear(self):
        with self._lock:
            self._toasts = []
