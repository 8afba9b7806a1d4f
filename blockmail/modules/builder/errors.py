"""Exceptions raised by the builder."""


class BuilderError(Exception):
    """Base class for builder errors"""


class UnknownBlockType(BuilderError, ValueError):
    """A block type outside the fixed catalogue reached the builder"""

    def __init__(self, block_type):
        self.block_type = block_type
        super().__init__(f"Unknown block type: {block_type!r}")


class InvalidGesture(BuilderError, ValueError):
    """The hosting page sent a gesture the canvas does not understand"""


class UnknownField(BuilderError, ValueError):
    """A property edit named a field the block's type does not expose"""

    def __init__(self, block_type, field_key):
        self.block_type = block_type
        self.field_key = field_key
        super().__init__(f"Block type {block_type!r} has no field {field_key!r}")


class InvalidFieldValue(BuilderError, ValueError):
    """A property edit carried a value that cannot go into a block bag"""
