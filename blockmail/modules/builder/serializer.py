"""
Email Serializer
================

Converts a document's blocks into a complete HTML email with inline CSS.
Output depends only on the blocks: the same document always renders to the
same string. Style keys are emitted in insertion order.
"""

import re
import logging

from markupsafe import escape

from . import registry
from .errors import UnknownBlockType

logger = logging.getLogger(__name__)

ENVELOPE_HEAD = '''<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Email Template</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f4;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; padding: 20px;">
'''

ENVELOPE_FOOT = '''
    </div>
</body>
</html>'''

BUTTON_BASE_STYLE = {
    'display': 'inline-block',
    'padding': '12px 24px',
    'textDecoration': 'none',
    'borderRadius': '6px',
    'color': '#ffffff',
}

IMAGE_PLACEHOLDER_STYLE = (
    'padding: 32px; border: 2px dashed #d1d5db; color: #9ca3af; '
    'font-size: 14px; text-align: center;'
)

_CAMEL_BOUNDARY = re.compile(r'([A-Z])')
_PROPERTY_NAME = re.compile(r'^[A-Za-z][A-Za-z0-9-]*$')


def camel_to_kebab(key):
    """fontSize -> font-size"""
    return _CAMEL_BOUNDARY.sub(r'-\1', key).lower()


def style_to_css(style, skip=()):
    """Flatten a style bag into an inline declaration string.

    Nested bags (e.g. a button's own style) and empty values are left out,
    as are keys that are not plain CSS property names.
    """
    declarations = []
    for key, value in style.items():
        if key in skip or value is None or value == '':
            continue
        if isinstance(value, (dict, list, tuple)):
            continue
        if not isinstance(key, str) or not _PROPERTY_NAME.match(key):
            logger.debug(f"Dropped style key {key!r}")
            continue
        declarations.append(f"{camel_to_kebab(key)}: {escape(str(value))};")
    return ' '.join(declarations)


def _style_attr(css):
    return f' style="{css}"' if css else ''


def _text(block):
    return escape(str(block.content.get('text') or ''))


def _render_heading(block):
    return f'<h1{_style_attr(style_to_css(block.style))}>{_text(block)}</h1>'


def _render_paragraph(block):
    return f'<p{_style_attr(style_to_css(block.style))}>{_text(block)}</p>'


def _render_image(block):
    outer = _style_attr(style_to_css(block.style))
    src = block.content.get('src') or ''
    alt = escape(str(block.content.get('alt') or ''))

    if not src:
        label = alt or 'Image'
        return f'<div{outer}><div style="{IMAGE_PLACEHOLDER_STYLE}">{label}</div></div>'

    image_css = style_to_css({
        'width': block.content.get('width'),
        'maxWidth': '100%',
        'height': 'auto',
    })
    return f'<div{outer}><img src="{escape(src)}" alt="{alt}" style="{image_css}" /></div>'


def button_style(block):
    """The button's own style: fixed base, then content.buttonStyle, then style.buttonStyle"""
    merged = dict(BUTTON_BASE_STYLE)
    for nested in (block.content.get('buttonStyle'), block.style.get('buttonStyle')):
        if isinstance(nested, dict):
            merged.update(nested)
    return merged


def _render_button(block):
    outer = _style_attr(style_to_css(block.style))
    href = escape(str(block.content.get('href') or '#'))
    return (
        f'<div{outer}><a href="{href}" style="{style_to_css(button_style(block))}" target="_blank">'
        f'{_text(block)}</a></div>'
    )


def _render_divider(block):
    outer = _style_attr(style_to_css(block.style))
    return f'<div{outer}><hr style="border: none; border-top: 1px solid #e5e7eb;" /></div>'


def _render_spacer(block):
    # Height belongs to the content bag; a height in the style bag is ignored
    spacer_style = {'height': block.content.get('height') or '20px'}
    spacer_style.update((key, value) for key, value in block.style.items() if key != 'height')
    return f'<div style="{style_to_css(spacer_style)}"></div>'


RENDERERS = {
    registry.HEADING: _render_heading,
    registry.PARAGRAPH: _render_paragraph,
    registry.IMAGE: _render_image,
    registry.BUTTON: _render_button,
    registry.DIVIDER: _render_divider,
    registry.SPACER: _render_spacer,
}


def render_block(block):
    """Render a single block to an inline-styled HTML fragment"""
    renderer = RENDERERS.get(block.type)
    if renderer is None:
        raise UnknownBlockType(block.type)
    return renderer(block)


def render_email(blocks):
    """Render a full document (an iterable of blocks) into a complete HTML email.

    Args:
        blocks: a Document or any iterable of Block objects, in display order

    Returns:
        Complete HTML email string with all inline CSS
    """
    body = '\n'.join(f'        {render_block(block)}' for block in blocks)
    return f'{ENVELOPE_HEAD}{body}{ENVELOPE_FOOT}'
