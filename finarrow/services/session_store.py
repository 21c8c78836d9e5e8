"""Session-scoped storage for the validated record sequence.

The record list is the hand-off between the upload step and the dashboard. It
lives only as long as the session: a new upload replaces it, and nothing is
written to disk.
"""

import threading
import uuid
from collections import OrderedDict
from typing import MutableMapping, Optional, Sequence

from pydantic import ValidationError

from finarrow.logging_config import get_logger
from finarrow.schemas.financial_data import (
    FinancialPeriodRecord,
    dump_records,
    load_records,
)

logger = get_logger(__name__)

DEFAULT_DATA_KEY = "financialData"


class SessionStore:
    """Record storage over any mutable mapping.

    The mapping is a plain dict per API session, or ``st.session_state`` in
    the Streamlit UI.
    """

    def __init__(self, backend: MutableMapping, key: str = DEFAULT_DATA_KEY):
        self._backend = backend
        self.key = key

    def save_records(self, records: Sequence[FinancialPeriodRecord]) -> None:
        self._backend[self.key] = dump_records(list(records))

    def load_records(self) -> Optional[list[FinancialPeriodRecord]]:
        """Stored records, or None when nothing (or something unreadable) is stored."""
        payload = self._backend.get(self.key)
        if not payload:
            return None
        try:
            return load_records(payload)
        except ValidationError as exc:
            logger.warning("session_payload_invalid", key=self.key, errors=exc.error_count())
            self.clear()
            return None

    def has_records(self) -> bool:
        return bool(self._backend.get(self.key))

    def clear(self) -> None:
        self._backend.pop(self.key, None)


class SessionRegistry:
    """In-memory per-session mappings for the HTTP API.

    Only IDs handed out by :meth:`create` are ever known. The registry holds at
    most ``max_sessions`` entries; past that the least recently used session
    is dropped.
    """

    def __init__(self, data_key: str = DEFAULT_DATA_KEY, max_sessions: int = 1000):
        self._sessions: OrderedDict[str, dict] = OrderedDict()
        self._lock = threading.Lock()
        self.data_key = data_key
        self.max_sessions = max_sessions

    @staticmethod
    def new_session_id() -> str:
        return uuid.uuid4().hex

    def create(self) -> tuple[str, SessionStore]:
        """Register a fresh session. Returns ``(session_id, store)``."""
        session_id = self.new_session_id()
        backend: dict = {}
        with self._lock:
            self._sessions[session_id] = backend
            evicted = 0
            while len(self._sessions) > self.max_sessions:
                self._sessions.popitem(last=False)
                evicted += 1
            active = len(self._sessions)
        if evicted:
            logger.info("sessions_evicted", evicted=evicted, max_sessions=self.max_sessions)
        logger.info("session_started", sessions=active)
        return session_id, SessionStore(backend, key=self.data_key)

    def get(self, session_id: Optional[str]) -> Optional[SessionStore]:
        """The store for a known session, or None for a missing or unknown ID."""
        if not session_id:
            return None
        with self._lock:
            backend = self._sessions.get(session_id)
            if backend is None:
                return None
            self._sessions.move_to_end(session_id)
        return SessionStore(backend, key=self.data_key)

    def end_session(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
