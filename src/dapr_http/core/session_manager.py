# src/dapr_http/core/session_manager.py
"""
Per-thread requests.Session storage for DaprHttp.

Deferred handles may be consumed from any thread, so the session is looked up
at consumption time and each consuming thread gets its own pooled session.
"""
import threading
from typing import Callable, List
import weakref

import requests


class ThreadSafeSessionManager:
    """
    Lazily creates one requests.Session per thread and closes them all on demand.

    Example:
        >>> manager = ThreadSafeSessionManager(session_factory)
        >>> session = manager.get_session()
        >>> manager.close_all()
    """

    def __init__(self, session_factory: Callable[[], requests.Session]):
        self._session_factory = session_factory
        self._local = threading.local()
        # weak refs: a session dies with its thread-local slot
        self._all_sessions: List[weakref.ref] = []
        self._sessions_lock = threading.Lock()
        # bumped by close_all so other threads drop their closed sessions
        self._generation = 0

    def get_session(self) -> requests.Session:
        """Session for the calling thread, created on first access."""
        session = getattr(self._local, 'session', None)
        if session is None or getattr(self._local, 'generation', None) != self._generation:
            session = self._session_factory()
            self._local.session = session
            self._local.generation = self._generation
            with self._sessions_lock:
                self._all_sessions.append(weakref.ref(session))
        return session

    def close_all(self):
        """
        Close sessions of all threads.

        Safe to call multiple times.
        """
        self._local.session = None

        with self._sessions_lock:
            self._generation += 1
            sessions = [ref() for ref in self._all_sessions]
            self._all_sessions.clear()

        for session in sessions:
            if session is not None:
                session.close()

    def get_active_sessions_count(self) -> int:
        """Sessions that are still alive (not garbage collected)."""
        with self._sessions_lock:
            return sum(1 for ref in self._all_sessions if ref() is not None)
