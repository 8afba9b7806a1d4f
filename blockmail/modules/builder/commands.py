"""
Builder Commands
================

Every gesture on the canvas or the properties panel becomes one of these
messages. The controller is the only thing that applies them.
"""


class Command:
    """Base class for builder commands"""

    name = 'command'

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        fields = ', '.join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"


class InsertBlock(Command):
    """Add a new block from the palette; optionally make it the selection"""

    name = 'insert'

    def __init__(self, block_type, index=None, select=True):
        self.block_type = block_type
        self.index = index
        self.select = select


class UpdateBlock(Command):
    name = 'update'

    def __init__(self, block_id, content=None, style=None):
        self.block_id = block_id
        self.content = content
        self.style = style


class RemoveBlock(Command):
    name = 'remove'

    def __init__(self, block_id):
        self.block_id = block_id


class ReorderBlock(Command):
    name = 'reorder'

    def __init__(self, block_id, index):
        self.block_id = block_id
        self.index = index


class SelectBlock(Command):
    """Select a block, or clear the selection with block_id=None"""

    name = 'select'

    def __init__(self, block_id):
        self.block_id = block_id
