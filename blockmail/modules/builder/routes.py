"""
Builder Routes
==============

JSON endpoints the editor page (or any hosting page) drives. Every route
that changes a session answers with the session's full state so the page
can redraw the canvas and the properties panel.
"""

import logging
from flask import request, jsonify, render_template, current_app

from . import builder_bp
from . import registry
from .canvas import apply_gesture
from .document import Document
from .editor import edit_command
from .errors import BuilderError
from .serializer import render_email
from ...core import db_log

logger = logging.getLogger(__name__)


def _extension():
    return current_app.extensions['blockmail']


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _run_in_session(session_id, action):
    """Apply action(session) under the session lock and return its new state"""
    builder_session = _extension().sessions.get(session_id)
    if builder_session is None:
        return jsonify({'error': 'Session not found'}), 404

    try:
        with builder_session.lock:
            action(builder_session)
            return jsonify(builder_session.state()), 200
    except BuilderError as e:
        logger.warning(f"Rejected request for session {session_id}: {e}")
        db_log('warning', 'builder', 'Rejected builder request', {'session_id': session_id, 'error': str(e)})
        return jsonify({'error': str(e)}), 400


# ===================
# PAGE + CATALOGUE
# ===================

@builder_bp.route('/')
def editor_page():
    """Editor page: palette, canvas and properties panel"""
    return render_template('builder/editor.html', palette=registry.palette())


@builder_bp.route('/palette')
def get_palette():
    """Block types available for dragging onto the canvas"""
    return jsonify({'palette': registry.palette()}), 200


@builder_bp.route('/render', methods=['POST'])
def render_blocks():
    """Render a block list to HTML without opening a session"""
    data = _json_body()
    if data is None or not isinstance(data.get('blocks', []), list):
        return jsonify({'error': 'Expected {"blocks": [...]}'}), 400

    document = Document.from_blocks(data.get('blocks', []))
    return jsonify({'html': render_email(document), 'blocks': document.snapshot()}), 200


# ===================
# SESSIONS
# ===================

@builder_bp.route('/session', methods=['POST'])
def open_session():
    """Open an editing session, optionally pre-populated from a template"""
    data = _json_body() or {}
    initial_blocks = data.get('blocks') or []
    if not isinstance(initial_blocks, list):
        return jsonify({'error': 'blocks must be a list'}), 400

    ext = _extension()
    builder_session = ext.sessions.create(initial_blocks, ext.listeners, ext.notifier)
    with builder_session.lock:
        return jsonify(builder_session.state()), 201


@builder_bp.route('/session/<session_id>')
def get_session(session_id):
    return _run_in_session(session_id, lambda builder_session: None)


@builder_bp.route('/session/<session_id>', methods=['DELETE'])
def close_session(session_id):
    if not _extension().sessions.discard(session_id):
        return jsonify({'error': 'Session not found'}), 404
    return jsonify({'message': 'Session closed'}), 200


@builder_bp.route('/session/<session_id>/gesture', methods=['POST'])
def gesture(session_id):
    """Apply a canvas gesture (palette drop, click, delete, text commit, move)"""
    data = _json_body()
    if data is None:
        return jsonify({'error': 'No gesture provided'}), 400

    return _run_in_session(session_id, lambda builder_session: apply_gesture(builder_session.controller, data))


@builder_bp.route('/session/<session_id>/blocks/<block_id>/field', methods=['POST'])
def edit_field(session_id, block_id):
    """Apply one properties-panel edit to the selected block"""
    data = _json_body()
    if data is None or 'field' not in data:
        return jsonify({'error': 'Expected {"field": ..., "value": ...}'}), 400

    def action(builder_session):
        controller = builder_session.controller
        block = controller.selected_block()
        if block is None or block.id != block_id:
            # The panel only edits the selected block
            logger.debug(f"Field edit ignored, block {block_id} is not selected")
            return
        controller.dispatch(edit_command(block, data['field'], data.get('value')))

    return _run_in_session(session_id, action)


@builder_bp.route('/session/<session_id>/preview-mode', methods=['POST'])
def preview_mode(session_id):
    """Switch the canvas between desktop, tablet and mobile widths"""
    data = _json_body() or {}
    return _run_in_session(session_id, lambda builder_session: builder_session.set_preview_mode(data.get('mode')))
