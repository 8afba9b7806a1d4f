"""
Selection State
===============

Holds at most one active block id. It knows nothing about the document;
the controller validates it after every command.
"""


class Selection:
    """The block currently open for editing, or None"""

    def __init__(self):
        self._current = None

    def select(self, block_id):
        self._current = block_id

    def clear(self):
        self._current = None

    def current(self):
        return self._current

    def __bool__(self):
        return self._current is not None

    def __repr__(self):
        return f"Selection({self._current!r})"
