"""
blockmail - A Flask drag-and-drop email builder
===============================================

Block-based email composition for Flask apps:
- Palette of typed blocks (heading, paragraph, image, button, divider, spacer)
- Canvas with drag/drop, inline editing and a properties panel
- Deterministic HTML email output with inline CSS

Usage:
    from blockmail import BlockMail

    blockmail = BlockMail(app)

    @blockmail.on_change
    def store_body(html, blocks):
        ...
"""

import logging

from flask_cors import CORS

from .core import Config, LoggingService
from .modules.builder import builder_bp
from .modules.builder.sessions import SessionStore
from .modules.builder.host import HostNotifier

__version__ = '0.1.0'

logger = logging.getLogger(__name__)


class BlockMail:
    """Flask extension wiring the builder blueprint, sessions and host callbacks"""

    def __init__(self, app=None, on_change=None):
        self.sessions = None
        self.notifier = None
        self.listeners = []
        self._registered_modules = []

        if on_change is not None:
            self.listeners.append(on_change)
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialise the builder with Flask app configuration"""
        # INTEGRATION: app.config values win; anything missing comes from the environment via Config
        for key in Config.APP_KEYS:
            app.config.setdefault(key, getattr(Config, key))

        origins = app.config['BUILDER_ALLOWED_ORIGINS']
        if isinstance(origins, str):
            origins = [origin.strip() for origin in origins.split(',') if origin.strip()]

        LoggingService.configure(app.config.get('LOG_DB'))

        self.sessions = SessionStore(int(app.config['BUILDER_MAX_SESSIONS']))

        callback_url = app.config.get('BUILDER_HOST_CALLBACK_URL')
        if callback_url:
            self.notifier = HostNotifier(callback_url, int(app.config['BUILDER_CALLBACK_TIMEOUT']))
            logger.info(f"Builder changes will be POSTed to {callback_url}")

        CORS(app, resources={r'/builder/*': {'origins': origins}})
        app.register_blueprint(builder_bp)
        self._registered_modules.append(builder_bp.name)

        app.extensions['blockmail'] = self
        logger.info(f"blockmail initialised, modules: {self._registered_modules}")

    def on_change(self, listener):
        """Register listener(html, blocks) for sessions opened from now on. Usable as a decorator."""
        self.listeners.append(listener)
        return listener

    def get_registered_modules(self):
        return list(self._registered_modules)


__all__ = ['BlockMail', '__version__']
