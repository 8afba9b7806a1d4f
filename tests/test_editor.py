"""
Property Editor Tests
=====================

The type -> field table is checked exhaustively here.
Run with: pytest tests/test_editor.py -v
"""

import pytest

from blockmail.modules.builder import registry, editor
from blockmail.modules.builder.commands import UpdateBlock
from blockmail.modules.builder.controller import BuilderController
from blockmail.modules.builder.errors import UnknownField, UnknownBlockType, InvalidFieldValue

EXPECTED_FIELDS = {
    'heading': ['margin', 'padding', 'fontSize', 'color'],
    'paragraph': ['margin', 'padding', 'fontSize', 'color'],
    'image': ['margin', 'padding', 'src', 'alt', 'width'],
    'button': ['margin', 'padding', 'text', 'href', 'buttonColor'],
    'divider': ['margin', 'padding'],
    'spacer': ['margin', 'padding', 'height'],
}


@pytest.fixture
def controller():
    return BuilderController()


def test_field_table_covers_every_type():
    assert set(editor.TYPE_FIELDS) == set(registry.BLOCK_TYPES)


@pytest.mark.parametrize('block_type', registry.BLOCK_TYPES)
def test_fields_for_each_type(block_type):
    keys = [field.key for field in editor.fields_for(block_type)]
    assert keys == EXPECTED_FIELDS[block_type]


def test_fields_for_unknown_type():
    with pytest.raises(UnknownBlockType):
        editor.fields_for('video')


def test_field_bags():
    assert editor.find_field('heading', 'fontSize').bag == editor.STYLE
    assert editor.find_field('image', 'src').bag == editor.CONTENT
    assert editor.find_field('spacer', 'height').bag == editor.CONTENT


def test_unknown_field_for_type():
    """Image blocks do not expose font size"""
    with pytest.raises(UnknownField):
        editor.find_field('image', 'fontSize')


# ---------------------------------------------------------------------------
# Values and edits
# ---------------------------------------------------------------------------

def test_field_value_falls_back_to_default(controller):
    block = controller.document.get(controller.insert('paragraph'))
    assert editor.field_value(block, editor.TEXT_COLOR) == '#000000'
    assert editor.field_value(block, editor.FONT_SIZE) == '16px'
    assert editor.field_value(block, editor.PADDING) == ''


def test_button_colour_reads_nested_bag(controller):
    block = controller.document.get(controller.insert('button'))
    assert editor.field_value(block, editor.BUTTON_COLOR) == '#8b5cf6'


def test_style_edit_command(controller):
    block = controller.document.get(controller.insert('heading'))
    command = editor.edit_command(block, 'color', '#ff00ff')
    assert command == UpdateBlock(block.id, style={'color': '#ff00ff'})


def test_content_edit_command(controller):
    block = controller.document.get(controller.insert('image'))
    command = editor.edit_command(block, 'src', 'https://example.com/x.png')
    assert command == UpdateBlock(block.id, content={'src': 'https://example.com/x.png'})


def test_button_colour_edit_keeps_other_nested_keys(controller):
    block_id = controller.insert('button')
    controller.update(block_id, {'buttonStyle': {'backgroundColor': '#8b5cf6', 'color': '#000000'}})
    block = controller.document.get(block_id)

    controller.dispatch(editor.edit_command(block, 'buttonColor', '#00ff00'))

    assert block.content['buttonStyle'] == {'backgroundColor': '#00ff00', 'color': '#000000'}
    assert 'background-color: #00ff00;' in controller.html


def test_numeric_and_empty_values(controller):
    block = controller.document.get(controller.insert('spacer'))
    assert editor.edit_command(block, 'height', 30).content == {'height': '30'}
    assert editor.edit_command(block, 'margin', None).style == {'margin': ''}


@pytest.mark.parametrize('bad', [True, ['10px'], {'px': 10}])
def test_non_text_values_rejected(controller, bad):
    block = controller.document.get(controller.insert('spacer'))
    with pytest.raises(InvalidFieldValue):
        editor.edit_command(block, 'height', bad)


# ---------------------------------------------------------------------------
# Panel rendering
# ---------------------------------------------------------------------------

def test_panel_without_selection_has_no_inputs():
    html = editor.render_panel(None)
    assert 'Select a component to edit its properties' in html
    assert '<input' not in html


def test_panel_for_button(controller):
    block = controller.document.get(controller.insert('button'))
    html = editor.render_panel(block)

    assert 'BUTTON PROPERTIES' in html
    assert html.count('<input') == 5
    assert 'data-field="buttonColor"' in html
    assert 'type="color" value="#8b5cf6"' in html
    assert 'data-field="fontSize"' not in html


def test_panel_escapes_values(controller):
    block_id = controller.insert('image')
    controller.update(block_id, {'alt': '"><b>x</b>'})
    html = editor.render_panel(controller.document.get(block_id))
    assert '<b>x</b>' not in html
