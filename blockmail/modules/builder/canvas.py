"""
Composition Surface
===================

The canvas in the middle of the editor page. The page reports gestures
(palette drops, clicks, deletes, inline text commits, moves) as small dicts;
each gesture becomes builder commands for the controller. The canvas HTML is
rebuilt from the document after every gesture.

Gesture shapes:
    {'kind': 'palette_drop', 'type': 'heading'}
    {'kind': 'click', 'id': 'a1b2c3'}          # id None clears the selection
    {'kind': 'delete', 'id': 'a1b2c3'}
    {'kind': 'text_commit', 'id': 'a1b2c3', 'text': 'Welcome'}
    {'kind': 'move', 'id': 'a1b2c3', 'index': 0}
    {'kind': 'drag_cancel'}                    # released outside the canvas
"""

from markupsafe import escape

from . import registry
from .commands import InsertBlock, SelectBlock, RemoveBlock, UpdateBlock, ReorderBlock
from .errors import InvalidGesture, UnknownBlockType
from .serializer import style_to_css, button_style

PREVIEW_WIDTHS = {
    'desktop': '896px',
    'tablet': '672px',
    'mobile': '384px',
}
DEFAULT_PREVIEW_MODE = 'desktop'

# Block types whose text is edited in place on the canvas
INLINE_TEXT_TYPES = (registry.HEADING, registry.PARAGRAPH)


# ===================
# GESTURES
# ===================

def _block_id(gesture):
    block_id = gesture.get('id')
    if not isinstance(block_id, str) or not block_id:
        raise InvalidGesture(f"Gesture '{gesture.get('kind')}' needs a block id")
    return block_id


def gesture_to_commands(gesture):
    """Translate one canvas gesture into the commands it stands for"""
    if not isinstance(gesture, dict):
        raise InvalidGesture('Gesture must be an object')

    kind = gesture.get('kind')

    if kind == 'palette_drop':
        block_type = gesture.get('type')
        if not registry.is_known(block_type):
            raise InvalidGesture(f"Unknown block type: {block_type!r}")
        # Palette drops always append
        return [InsertBlock(block_type, select=True)]

    elif kind == 'click':
        block_id = gesture.get('id')
        return [SelectBlock(block_id if block_id else None)]

    elif kind == 'delete':
        return [RemoveBlock(_block_id(gesture))]

    elif kind == 'text_commit':
        text = gesture.get('text')
        if not isinstance(text, str):
            raise InvalidGesture('text_commit needs a text value')
        return [UpdateBlock(_block_id(gesture), content={'text': text})]

    elif kind == 'move':
        index = gesture.get('index')
        if not isinstance(index, int) or isinstance(index, bool):
            raise InvalidGesture('move needs an integer index')
        return [ReorderBlock(_block_id(gesture), index)]

    elif kind == 'drag_cancel':
        return []

    raise InvalidGesture(f"Unknown gesture: {kind!r}")


def apply_gesture(controller, gesture):
    """Run a gesture against a controller. Returns the new block id for drops."""
    command_list = gesture_to_commands(gesture)
    if gesture['kind'] == 'text_commit':
        block = controller.document.get(gesture['id'])
        if block is not None and block.type not in INLINE_TEXT_TYPES:
            raise InvalidGesture(f"Block {block.id} ({block.type}) has no inline text")
    return controller.dispatch_all(command_list)


def check_preview_mode(mode):
    if mode not in PREVIEW_WIDTHS:
        raise InvalidGesture(f"Unknown preview mode: {mode!r}")
    return mode


# ===================
# RENDERING
# ===================

def _editable(block, css_class, fallback):
    text = block.content.get('text') or fallback
    return (
        f'<div class="{css_class}" style="{style_to_css(block.style)}" '
        f'contenteditable="true" data-editable="text">{escape(text)}</div>'
    )


def _canvas_heading(block):
    return _editable(block, 'canvas-heading', 'Your Heading Here')


def _canvas_paragraph(block):
    return _editable(block, 'canvas-paragraph', 'Edit this text block...')


def _canvas_image(block):
    src = block.content.get('src')
    if not src:
        inner = '<div class="canvas-image-placeholder">Click to add image</div>'
    else:
        image_css = style_to_css({'width': block.content.get('width') or 'auto', 'maxWidth': '100%', 'height': 'auto'})
        alt = escape(block.content.get('alt') or '')
        inner = f'<img src="{escape(src)}" alt="{alt}" style="{image_css}" />'
    return f'<div class="canvas-image" style="{style_to_css(block.style)}">{inner}</div>'


def _canvas_button(block):
    text = escape(block.content.get('text') or 'Click Here')
    return (
        f'<div class="canvas-button-row" style="{style_to_css(block.style)}">'
        f'<button type="button" class="canvas-button" style="{style_to_css(button_style(block))}">'
        f'{text}</button></div>'
    )


def _canvas_divider(block):
    return f'<div class="canvas-divider" style="{style_to_css(block.style)}"><hr /></div>'


def _canvas_spacer(block):
    spacer_style = {'height': block.content.get('height') or '20px'}
    spacer_style.update((key, value) for key, value in block.style.items() if key != 'height')
    return f'<div class="canvas-spacer" style="{style_to_css(spacer_style)}"></div>'


CANVAS_TEMPLATES = {
    registry.HEADING: _canvas_heading,
    registry.PARAGRAPH: _canvas_paragraph,
    registry.IMAGE: _canvas_image,
    registry.BUTTON: _canvas_button,
    registry.DIVIDER: _canvas_divider,
    registry.SPACER: _canvas_spacer,
}


def render_block(block, selected=False):
    template = CANVAS_TEMPLATES.get(block.type)
    if template is None:
        raise UnknownBlockType(block.type)

    css_class = 'canvas-block selected' if selected else 'canvas-block'
    return (
        f'<div class="{css_class}" data-block-id="{escape(block.id)}" data-block-type="{block.type}">'
        f'{template(block)}'
        f'<button type="button" class="canvas-block-delete" data-action="delete" '
        f'data-block-id="{escape(block.id)}" title="Delete">&times;</button>'
        f'</div>'
    )


def render_empty():
    return (
        '<div class="canvas-empty">'
        '<h3>Start Building Your Email</h3>'
        '<p>Drag components from the left panel to begin</p>'
        '</div>'
    )


def render_canvas(blocks, selected_id=None, preview_mode=DEFAULT_PREVIEW_MODE):
    """Render the whole canvas: one visual per block, or the empty placeholder"""
    width = PREVIEW_WIDTHS[check_preview_mode(preview_mode)]
    blocks = list(blocks)

    if blocks:
        inner = '\n'.join(render_block(block, block.id == selected_id) for block in blocks)
    else:
        inner = render_empty()

    return (
        f'<div class="builder-canvas" data-preview-mode="{preview_mode}" '
        f'style="max-width: {width}; margin: 0 auto;">\n{inner}\n</div>'
    )
