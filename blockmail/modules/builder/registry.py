"""
Block Registry
==============

Fixed catalogue of block types. Each type has a default content bag, a
default style bag and a palette label. Every other builder module dispatches
on these tags, so adding a type starts here.
"""

import copy

from .errors import UnknownBlockType

HEADING = 'heading'
PARAGRAPH = 'paragraph'
IMAGE = 'image'
BUTTON = 'button'
DIVIDER = 'divider'
SPACER = 'spacer'

# Palette order
BLOCK_TYPES = (HEADING, PARAGRAPH, IMAGE, BUTTON, DIVIDER, SPACER)

# Tags found in older saved templates
LEGACY_TYPES = {
    'text': PARAGRAPH,
}

_CATALOGUE = {
    HEADING: {
        'label': 'Heading',
        'content': {'text': 'Your Heading Here'},
        'style': {'margin': '0 0 16px 0', 'fontSize': '24px', 'fontWeight': 'bold'},
    },
    PARAGRAPH: {
        'label': 'Text Block',
        'content': {'text': 'Edit this text block...'},
        'style': {'margin': '0 0 16px 0', 'fontSize': '16px', 'lineHeight': '1.6'},
    },
    IMAGE: {
        'label': 'Image',
        'content': {'src': '', 'alt': '', 'width': '100%'},
        'style': {'margin': '0 0 16px 0', 'textAlign': 'center'},
    },
    BUTTON: {
        'label': 'Button',
        'content': {'text': 'Click Here', 'href': '#', 'buttonStyle': {'backgroundColor': '#8b5cf6'}},
        'style': {'margin': '16px 0', 'textAlign': 'center'},
    },
    DIVIDER: {
        'label': 'Divider',
        'content': {},
        'style': {'margin': '24px 0'},
    },
    SPACER: {
        'label': 'Spacer',
        'content': {'height': '20px'},
        'style': {},
    },
}


def _entry(block_type):
    try:
        return _CATALOGUE[block_type]
    except (KeyError, TypeError):
        raise UnknownBlockType(block_type) from None


def defaults_for(block_type):
    """Return fresh (content, style) defaults for a block type"""
    entry = _entry(block_type)
    return copy.deepcopy(entry['content']), copy.deepcopy(entry['style'])


def label_for(block_type):
    return _entry(block_type)['label']


def palette():
    """Palette entries in display order"""
    return [{'type': block_type, 'label': label_for(block_type)} for block_type in BLOCK_TYPES]


def is_known(block_type):
    return isinstance(block_type, str) and block_type in _CATALOGUE


def normalize_type(tag):
    """Map a tag from external input onto the catalogue, or None if unknown"""
    if not isinstance(tag, str):
        return None
    tag = LEGACY_TYPES.get(tag, tag)
    return tag if tag in _CATALOGUE else None
