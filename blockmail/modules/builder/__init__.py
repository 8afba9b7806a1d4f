"""
Builder Module
==============

Provides:
- Drag-and-drop email builder page (palette, canvas, properties panel)
- Block document model with insert / update / remove / reorder
- Deterministic HTML email serializer
- In-memory editing sessions that push (html, blocks) to the host
"""

from flask import Blueprint

builder_bp = Blueprint(
    'builder',
    __name__,
    url_prefix='/builder',
    template_folder='templates',
)

from . import routes
