"""
Builder Sessions
================

One editing session per open editor page. Each session owns a controller
and a lock; requests for the same session are applied one at a time.
Sessions live in memory only and are dropped when the page closes them or
when the store is full.
"""

import uuid
import logging
import threading
from collections import OrderedDict

from .controller import BuilderController
from .canvas import render_canvas, check_preview_mode, DEFAULT_PREVIEW_MODE
from .editor import render_panel
from ...core import db_log

logger = logging.getLogger(__name__)


class BuilderSession:
    """An editing session: controller, lock and canvas preview mode"""

    def __init__(self, session_id, controller):
        self.id = session_id
        self.controller = controller
        self.lock = threading.Lock()
        self.preview_mode = DEFAULT_PREVIEW_MODE

    def set_preview_mode(self, mode):
        self.preview_mode = check_preview_mode(mode)

    def state(self):
        """Everything the editor page needs to redraw itself"""
        controller = self.controller
        html, blocks = controller.output
        return {
            'session_id': self.id,
            'html': html,
            'blocks': blocks,
            'selected': controller.selected_id(),
            'canvas': render_canvas(controller.document, controller.selected_id(), self.preview_mode),
            'panel': render_panel(controller.selected_block()),
            'preview_mode': self.preview_mode,
        }


class SessionStore:
    """In-memory sessions, oldest dropped first once max_sessions is reached"""

    def __init__(self, max_sessions=200):
        self.max_sessions = max_sessions
        self._sessions = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, session_id):
        return session_id in self._sessions

    def create(self, initial_blocks=None, listeners=(), notifier=None):
        """Open a session, optionally pre-populated from a template.

        Listeners receive (html, blocks) now and after every change.
        """
        session_id = uuid.uuid4().hex
        controller = BuilderController(initial_blocks)
        for listener in listeners:
            controller.subscribe(listener)
        if notifier is not None:
            controller.subscribe(notifier.for_session(session_id))

        session = BuilderSession(session_id, controller)
        with self._lock:
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info(f"Session store full, dropped session {evicted_id}")

        logger.info(f"Builder session {session_id} opened with {len(controller.document)} block(s)")
        db_log('info', 'sessions', 'Builder session opened', {
            'session_id': session_id, 'blocks': len(controller.document)
        })
        controller.publish()
        return session

    def get(self, session_id):
        with self._lock:
            return self._sessions.get(session_id)

    def discard(self, session_id):
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        db_log('info', 'sessions', 'Builder session closed', {'session_id': session_id})
        return True
