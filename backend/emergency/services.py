"""
Process-wide Dispatcher used by the API views.
Built lazily from settings.HOSPITAL_DATA_PATH on first use.
"""
import threading
from typing import Optional

from django.conf import settings

from dispatch.dispatcher import Dispatcher, build_dispatcher

_dispatcher: Optional[Dispatcher] = None
_lock = threading.Lock()


def get_dispatcher() -> Dispatcher:
    global _dispatcher
    with _lock:
        if _dispatcher is None:
            _dispatcher = build_dispatcher(settings.HOSPITAL_DATA_PATH)
        return _dispatcher


def set_dispatcher(dispatcher: Optional[Dispatcher]) -> None:
    """
    Swap the process-wide dispatcher (None rebuilds from settings on next use).
    """
    global _dispatcher
    with _lock:
        _dispatcher = dispatcher
