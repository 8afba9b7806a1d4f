"""
Document Model
==============

A Document is the ordered, flat list of blocks that make up one email.
It owns block identity and ordering; all mutation goes through insert,
update, remove and reorder, each addressed by block id.
"""

import copy
import uuid
import logging

from . import registry
from ...core import db_log

logger = logging.getLogger(__name__)


class Block:
    """One typed unit of the email: id, type, content bag, style bag"""

    __slots__ = ('id', 'type', 'content', 'style')

    def __init__(self, block_id, block_type, content, style):
        self.id = block_id
        self.type = block_type
        self.content = content
        self.style = style

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'content': copy.deepcopy(self.content),
            'style': copy.deepcopy(self.style),
        }

    def __repr__(self):
        return f"Block(id={self.id!r}, type={self.type!r})"


class Document:
    """Ordered collection of blocks with unique ids"""

    def __init__(self):
        self._blocks = []
        # Every id this document has handed out or loaded; never reissued
        self._issued = set()

    # ===================
    # READING
    # ===================

    def __len__(self):
        return len(self._blocks)

    def __iter__(self):
        return iter(self._blocks)

    def __contains__(self, block_id):
        return self.index_of(block_id) is not None

    def ids(self):
        return [block.id for block in self._blocks]

    def index_of(self, block_id):
        for index, block in enumerate(self._blocks):
            if block.id == block_id:
                return index
        return None

    def get(self, block_id):
        index = self.index_of(block_id)
        return self._blocks[index] if index is not None else None

    def snapshot(self):
        """Deep-copied list of block dicts, safe to hand to the host"""
        return [block.to_dict() for block in self._blocks]

    # ===================
    # MUTATION
    # ===================

    def _new_id(self):
        while True:
            block_id = uuid.uuid4().hex[:9]
            if block_id not in self._issued:
                self._issued.add(block_id)
                return block_id

    def insert(self, block_type, at_index=None):
        """Create a block with registry defaults and return its id.

        at_index defaults to append; indexes past the end append and
        negative indexes insert at the top.
        """
        content, style = registry.defaults_for(block_type)
        block = Block(self._new_id(), block_type, content, style)

        if at_index is None or at_index >= len(self._blocks):
            self._blocks.append(block)
        else:
            self._blocks.insert(max(at_index, 0), block)

        logger.debug(f"Inserted {block_type} block {block.id}")
        return block.id

    def update(self, block_id, content=None, style=None):
        """Shallow-merge partial content and/or style. Returns True if applied."""
        block = self.get(block_id)
        if block is None:
            logger.debug(f"Update ignored, no block {block_id}")
            return False
        if not content and not style:
            return False

        if content:
            block.content.update(copy.deepcopy(content))
        if style:
            block.style.update(copy.deepcopy(style))
        return True

    def remove(self, block_id):
        index = self.index_of(block_id)
        if index is None:
            logger.debug(f"Remove ignored, no block {block_id}")
            return False
        del self._blocks[index]
        return True

    def reorder(self, block_id, to_index):
        """Move a block to to_index (clamped), keeping the others in order"""
        index = self.index_of(block_id)
        if index is None:
            logger.debug(f"Reorder ignored, no block {block_id}")
            return False

        to_index = min(max(to_index, 0), len(self._blocks) - 1)
        if to_index == index:
            return False

        block = self._blocks.pop(index)
        self._blocks.insert(to_index, block)
        return True

    # ===================
    # LOADING
    # ===================

    @classmethod
    def from_blocks(cls, raw_blocks):
        """Build a document from an externally supplied block list.

        Entries with an unknown type or a malformed shape are dropped.
        Missing content keys are filled from the registry defaults and
        missing or repeated ids are replaced with fresh ones.
        """
        document = cls()
        dropped = 0

        for raw in raw_blocks or []:
            block = document._load_block(raw)
            if block is None:
                dropped += 1
                continue
            document._blocks.append(block)

        if dropped:
            logger.warning(f"Dropped {dropped} invalid block(s) from initial template")
            db_log('warning', 'builder', 'Dropped invalid blocks from initial template', {'dropped': dropped})

        return document

    def _load_block(self, raw):
        if not isinstance(raw, dict):
            return None

        block_type = registry.normalize_type(raw.get('type'))
        if block_type is None:
            return None

        raw_content = raw.get('content') or {}
        raw_style = raw.get('styles', raw.get('style')) or {}
        if not isinstance(raw_content, dict) or not isinstance(raw_style, dict):
            return None

        content, style = registry.defaults_for(block_type)
        raw_content = copy.deepcopy(raw_content)
        if 'buttonStyles' in raw_content:
            raw_content.setdefault('buttonStyle', raw_content.pop('buttonStyles'))
        content.update(raw_content)
        # A saved style bag replaces the defaults wholesale
        if 'style' in raw or 'styles' in raw:
            style = copy.deepcopy(raw_style)

        block_id = raw.get('id')
        if not isinstance(block_id, str) or not block_id or block_id in self._issued:
            block_id = self._new_id()
        else:
            self._issued.add(block_id)

        return Block(block_id, block_type, content, style)
