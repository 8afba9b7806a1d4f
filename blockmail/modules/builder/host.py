"""
Host Notification
=================

Delivers (html, blocks) to the application hosting the builder. In-process
hosts pass a callable to BlockMail(on_change=...); out-of-process hosts set
BUILDER_HOST_CALLBACK_URL and receive a JSON POST after every change.
"""

import logging
import requests

from ...core import db_log

logger = logging.getLogger(__name__)


class HostNotifier:
    """POSTs builder output to the host's callback URL"""

    def __init__(self, url, timeout=10, http=None):
        self.url = url
        self.timeout = timeout
        self.http = http or requests

    def for_session(self, session_id):
        """Listener bound to one editing session"""
        def listener(html, blocks):
            self.send(session_id, html, blocks)
        return listener

    def send(self, session_id, html, blocks):
        """POST one update. Returns True on a 2xx response.

        Delivery problems are logged; the change has already been applied
        and stays applied.
        """
        payload = {
            'session_id': session_id,
            'html': html,
            'blocks': blocks,
        }
        try:
            resp = self.http.post(self.url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            return True
        except requests.RequestException as e:
            error_detail = ''
            if getattr(e, 'response', None) is not None:
                error_detail = e.response.text[:500]
            logger.error(f"Host callback failed for session {session_id}: {e}")
            db_log('error', 'host', 'Host callback failed', {
                'session_id': session_id, 'url': self.url, 'error': str(e), 'detail': error_detail
            })
            return False
