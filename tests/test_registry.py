"""
Block Registry Tests
====================

Run with: pytest tests/test_registry.py -v
"""

import pytest

from blockmail.modules.builder import registry
from blockmail.modules.builder.errors import UnknownBlockType


def test_catalogue_is_the_closed_type_set():
    assert registry.BLOCK_TYPES == ('heading', 'paragraph', 'image', 'button', 'divider', 'spacer')


@pytest.mark.parametrize('block_type', registry.BLOCK_TYPES)
def test_defaults_exist_for_every_type(block_type):
    content, style = registry.defaults_for(block_type)
    assert isinstance(content, dict)
    assert isinstance(style, dict)


def test_defaults_match_block_shapes():
    assert registry.defaults_for('heading')[0] == {'text': 'Your Heading Here'}
    assert registry.defaults_for('paragraph')[0] == {'text': 'Edit this text block...'}
    assert registry.defaults_for('image')[0] == {'src': '', 'alt': '', 'width': '100%'}
    assert registry.defaults_for('button')[0] == {
        'text': 'Click Here', 'href': '#', 'buttonStyle': {'backgroundColor': '#8b5cf6'}
    }
    assert registry.defaults_for('divider')[0] == {}
    assert registry.defaults_for('spacer')[0] == {'height': '20px'}
    assert registry.defaults_for('spacer')[1] == {}


def test_defaults_are_fresh_copies():
    """Mutating returned defaults must not leak into the next block"""
    content, style = registry.defaults_for('button')
    content['buttonStyle']['backgroundColor'] = '#000000'
    style['margin'] = '0'

    content_again, style_again = registry.defaults_for('button')
    assert content_again['buttonStyle']['backgroundColor'] == '#8b5cf6'
    assert style_again['margin'] == '16px 0'


@pytest.mark.parametrize('bad', ['text', 'video', '', None, 3])
def test_unknown_type_fails_fast(bad):
    with pytest.raises(UnknownBlockType):
        registry.defaults_for(bad)


def test_palette_order_and_labels():
    palette = registry.palette()
    assert [item['type'] for item in palette] == list(registry.BLOCK_TYPES)
    assert palette[1] == {'type': 'paragraph', 'label': 'Text Block'}


def test_normalize_type_maps_legacy_text_tag():
    assert registry.normalize_type('text') == 'paragraph'
    assert registry.normalize_type('heading') == 'heading'
    assert registry.normalize_type('carousel') is None
    assert registry.normalize_type(None) is None


def test_label_for():
    assert registry.label_for('spacer') == 'Spacer'
    with pytest.raises(UnknownBlockType):
        registry.label_for('carousel')


@pytest.mark.parametrize('value, expected', [
    ('button', True),
    ('text', False),
    ('Button', False),
    (None, False),
    (['heading'], False),
])
def test_is_known(value, expected):
    assert registry.is_known(value) is expected
