"""
Property Editor
===============

The properties panel on the right of the editor page. Which inputs appear
is fixed per block type by TYPE_FIELDS; margin and padding are offered for
every type. Each edit becomes an UpdateBlock command carrying only the
changed key, so the document stays the single source of truth.
"""

from markupsafe import escape

from . import registry
from .commands import UpdateBlock
from .errors import UnknownBlockType, UnknownField, InvalidFieldValue

CONTENT = 'content'
STYLE = 'style'


class Field:
    """One input in the properties panel"""

    def __init__(self, key, label, bag, input_type='text', placeholder='', default='', path=None):
        self.key = key
        self.label = label
        self.bag = bag
        self.input_type = input_type
        self.placeholder = placeholder
        self.default = default
        # (outer_key, inner_key) for values stored in a nested bag
        self.path = path

    def __repr__(self):
        return f"Field({self.key!r}, bag={self.bag!r})"


MARGIN = Field('margin', 'Margin', STYLE, placeholder='e.g., 10px 0')
PADDING = Field('padding', 'Padding', STYLE, placeholder='e.g., 20px')
FONT_SIZE = Field('fontSize', 'Font Size', STYLE, placeholder='e.g., 16px')
TEXT_COLOR = Field('color', 'Text Color', STYLE, input_type='color', default='#000000')
IMAGE_SRC = Field('src', 'Image URL', CONTENT, placeholder='https://example.com/image.jpg')
IMAGE_ALT = Field('alt', 'Alt Text', CONTENT, placeholder='Image description')
IMAGE_WIDTH = Field('width', 'Width', CONTENT, placeholder='e.g., 100%')
BUTTON_TEXT = Field('text', 'Button Text', CONTENT, placeholder='Click Here')
BUTTON_LINK = Field('href', 'Button Link', CONTENT, placeholder='https://example.com')
BUTTON_COLOR = Field(
    'buttonColor', 'Button Color', CONTENT, input_type='color', default='#8b5cf6',
    path=('buttonStyle', 'backgroundColor'),
)
SPACER_HEIGHT = Field('height', 'Height', CONTENT, placeholder='e.g., 20px')

UNIVERSAL_FIELDS = (MARGIN, PADDING)

TYPE_FIELDS = {
    registry.HEADING: (FONT_SIZE, TEXT_COLOR),
    registry.PARAGRAPH: (FONT_SIZE, TEXT_COLOR),
    registry.IMAGE: (IMAGE_SRC, IMAGE_ALT, IMAGE_WIDTH),
    registry.BUTTON: (BUTTON_TEXT, BUTTON_LINK, BUTTON_COLOR),
    registry.DIVIDER: (),
    registry.SPACER: (SPACER_HEIGHT,),
}


def fields_for(block_type):
    """Universal fields followed by the type's own fields"""
    try:
        return UNIVERSAL_FIELDS + TYPE_FIELDS[block_type]
    except KeyError:
        raise UnknownBlockType(block_type) from None


def find_field(block_type, field_key):
    for field in fields_for(block_type):
        if field.key == field_key:
            return field
    raise UnknownField(block_type, field_key)


def _bag(block, field):
    return block.content if field.bag == CONTENT else block.style


def field_value(block, field):
    """Current value of a field, or its default when the block has none"""
    bag = _bag(block, field)
    if field.path:
        nested = bag.get(field.path[0])
        value = nested.get(field.path[1]) if isinstance(nested, dict) else None
    else:
        value = bag.get(field.key)
    return field.default if value is None or value == '' else value


def edit_command(block, field_key, value):
    """Build the UpdateBlock for one edited input"""
    field = find_field(block.type, field_key)

    if value is None:
        value = ''
    elif isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidFieldValue(f"Field {field_key!r} takes text, got {type(value).__name__}")
    value = str(value)

    if field.path:
        outer_key, inner_key = field.path
        current = _bag(block, field).get(outer_key)
        nested = dict(current) if isinstance(current, dict) else {}
        nested[inner_key] = value
        partial = {outer_key: nested}
    else:
        partial = {field.key: value}

    if field.bag == CONTENT:
        return UpdateBlock(block.id, content=partial)
    return UpdateBlock(block.id, style=partial)


def render_help():
    return (
        '<div class="panel-empty">'
        '<p>Select a component to edit its properties</p>'
        '</div>'
    )


def _render_field(block, field):
    input_id = f'field-{field.key}'
    value = escape(field_value(block, field))
    placeholder = f' placeholder="{escape(field.placeholder)}"' if field.placeholder else ''
    return (
        f'<div class="panel-field">'
        f'<label for="{input_id}">{escape(field.label)}</label>'
        f'<input id="{input_id}" name="{field.key}" type="{field.input_type}" '
        f'value="{value}" data-field="{field.key}"{placeholder} />'
        f'</div>'
    )


def render_panel(block):
    """Properties panel for the selected block, or help text with no selection"""
    if block is None:
        return render_help()

    inputs = '\n'.join(_render_field(block, field) for field in fields_for(block.type))
    return (
        f'<div class="panel" data-block-id="{escape(block.id)}">\n'
        f'<h3>{block.type.upper()} PROPERTIES</h3>\n'
        f'{inputs}\n'
        f'</div>'
    )
