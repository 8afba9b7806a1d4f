"""
Builder Controller
==================

Owns one editing session's Document and Selection. Commands are applied
one at a time; after each one the selection is checked against the
document, and after each committed document change the serialized output
(html, blocks) is recomputed and pushed to every listener.
"""

import copy
import logging

from . import commands
from .document import Document
from .selection import Selection
from .serializer import render_email
from ...core import db_log

logger = logging.getLogger(__name__)


class BuilderController:
    """Single owner of a document and its selection"""

    def __init__(self, initial_blocks=None, on_change=None):
        self.document = Document.from_blocks(initial_blocks)
        self.selection = Selection()
        self._listeners = []
        if on_change is not None:
            self._listeners.append(on_change)
        self._output = self._serialize()

    # ===================
    # LISTENERS
    # ===================

    def subscribe(self, listener):
        """Register a callable(html, blocks) run after every committed change"""
        self._listeners.append(listener)

    def publish(self):
        """Push the current output to every listener"""
        html, blocks = self._output
        for listener in self._listeners:
            listener(html, copy.deepcopy(blocks))

    # ===================
    # STATE
    # ===================

    @property
    def output(self):
        """Latest (html, blocks) pair"""
        return self._output

    @property
    def html(self):
        return self._output[0]

    def selected_id(self):
        return self.selection.current()

    def selected_block(self):
        block_id = self.selection.current()
        return self.document.get(block_id) if block_id is not None else None

    # ===================
    # COMMANDS
    # ===================

    def dispatch(self, command):
        """Apply one command. Returns the new block id for inserts, else None."""
        handler = self._HANDLERS.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported builder command: {command!r}")

        changed, result = handler(self, command)

        # Selection may only name a block that is still in the document
        current = self.selection.current()
        if current is not None and current not in self.document:
            self.selection.clear()

        if changed:
            self._output = self._serialize()
            logger.debug(f"Applied {command!r}, {len(self.document)} block(s)")
            self.publish()
        return result

    def dispatch_all(self, command_list):
        results = [self.dispatch(command) for command in command_list]
        return results[-1] if results else None

    def _serialize(self):
        return render_email(self.document), self.document.snapshot()

    def _insert(self, command):
        block_id = self.document.insert(command.block_type, command.index)
        if command.select:
            self.selection.select(block_id)
        db_log('info', 'builder', f'Block added: {command.block_type}', {'id': block_id})
        return True, block_id

    def _update(self, command):
        return self.document.update(command.block_id, command.content, command.style), None

    def _remove(self, command):
        removed = self.document.remove(command.block_id)
        if removed:
            if self.selection.current() == command.block_id:
                self.selection.clear()
            db_log('info', 'builder', 'Block removed', {'id': command.block_id})
        return removed, None

    def _reorder(self, command):
        return self.document.reorder(command.block_id, command.index), None

    def _select(self, command):
        if command.block_id is None:
            self.selection.clear()
        elif command.block_id in self.document:
            self.selection.select(command.block_id)
        else:
            logger.debug(f"Select ignored, no block {command.block_id}")
        return False, None

    _HANDLERS = {
        commands.InsertBlock: _insert,
        commands.UpdateBlock: _update,
        commands.RemoveBlock: _remove,
        commands.ReorderBlock: _reorder,
        commands.SelectBlock: _select,
    }

    # ===================
    # CONVENIENCE
    # ===================

    def insert(self, block_type, at_index=None, select=False):
        return self.dispatch(commands.InsertBlock(block_type, at_index, select))

    def update(self, block_id, content=None, style=None):
        self.dispatch(commands.UpdateBlock(block_id, content, style))

    def remove(self, block_id):
        self.dispatch(commands.RemoveBlock(block_id))

    def reorder(self, block_id, to_index):
        self.dispatch(commands.ReorderBlock(block_id, to_index))

    def select(self, block_id):
        self.dispatch(commands.SelectBlock(block_id))
