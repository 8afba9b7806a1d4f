"""
Session Store and Host Notifier Tests
=====================================

Run with: pytest tests/test_sessions.py -v
"""

from unittest.mock import MagicMock

import pytest
import requests

from blockmail.modules.builder.errors import InvalidGesture
from blockmail.modules.builder.host import HostNotifier
from blockmail.modules.builder.sessions import SessionStore


# ---------------------------------------------------------------------------
# SessionStore
# ---------------------------------------------------------------------------

def test_create_publishes_initial_state():
    calls = []
    store = SessionStore()
    session = store.create(
        [{'type': 'heading', 'content': {'text': 'From template'}}],
        listeners=[lambda html, blocks: calls.append((html, blocks))],
    )

    assert session.id in store
    assert len(calls) == 1
    assert '>From template</h1>' in calls[0][0]
    assert calls[0][1][0]['type'] == 'heading'


def test_state_payload():
    store = SessionStore()
    session = store.create()

    state = session.state()
    assert set(state) == {'session_id', 'html', 'blocks', 'selected', 'canvas', 'panel', 'preview_mode'}
    assert state['blocks'] == []
    assert state['selected'] is None
    assert 'Start Building Your Email' in state['canvas']
    assert 'Select a component' in state['panel']
    assert state['preview_mode'] == 'desktop'


def test_preview_mode_validation():
    session = SessionStore().create()
    session.set_preview_mode('mobile')
    assert session.state()['preview_mode'] == 'mobile'
    with pytest.raises(InvalidGesture):
        session.set_preview_mode('fridge')
    assert session.preview_mode == 'mobile'


def test_store_evicts_oldest():
    store = SessionStore(max_sessions=2)
    first = store.create()
    second = store.create()
    third = store.create()

    assert len(store) == 2
    assert store.get(first.id) is None
    assert store.get(second.id) is second
    assert store.get(third.id) is third


def test_discard():
    store = SessionStore()
    session = store.create()
    assert store.discard(session.id) is True
    assert store.discard(session.id) is False
    assert store.get(session.id) is None


def test_sessions_are_independent():
    store = SessionStore()
    one = store.create()
    two = store.create()
    one.controller.insert('heading')
    assert len(one.controller.document) == 1
    assert len(two.controller.document) == 0


# ---------------------------------------------------------------------------
# HostNotifier
# ---------------------------------------------------------------------------

def test_notifier_posts_json_payload():
    http = MagicMock()
    notifier = HostNotifier('https://host.example/hook', timeout=3, http=http)

    assert notifier.send('s1', '<html></html>', [{'id': 'a'}]) is True
    http.post.assert_called_once_with(
        'https://host.example/hook',
        json={'session_id': 's1', 'html': '<html></html>', 'blocks': [{'id': 'a'}]},
        timeout=3,
    )


def test_notifier_failure_is_logged_not_raised():
    http = MagicMock()
    http.post.side_effect = requests.ConnectionError('host down')
    notifier = HostNotifier('https://host.example/hook', http=http)

    assert notifier.send('s1', '<html></html>', []) is False


def test_notifier_http_error_status():
    response = MagicMock()
    response.text = 'bad request'
    response.raise_for_status.side_effect = requests.HTTPError('400', response=response)
    http = MagicMock()
    http.post.return_value = response

    notifier = HostNotifier('https://host.example/hook', http=http)
    assert notifier.send('s1', '', []) is False


def test_session_changes_reach_notifier():
    http = MagicMock()
    notifier = HostNotifier('https://host.example/hook', http=http)
    store = SessionStore()
    session = store.create(notifier=notifier)

    session.controller.insert('paragraph')

    # Initial publish + one insert
    assert http.post.call_count == 2
    payload = http.post.call_args.kwargs['json']
    assert payload['session_id'] == session.id
    assert payload['blocks'][0]['type'] == 'paragraph'
