import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    """
    Base configuration for the blockmail builder.
    Host applications can override any of these in app.config before
    initialising the extension.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Origins allowed to call the builder endpoints (the pages embedding the builder)
    BUILDER_ALLOWED_ORIGINS = _split_origins(
        os.getenv('BUILDER_ALLOWED_ORIGINS', 'http://localhost:3000,http://localhost:5000')
    )

    # Where to POST (html, blocks) after every committed change - optional
    BUILDER_HOST_CALLBACK_URL = os.getenv('BUILDER_HOST_CALLBACK_URL')
    BUILDER_CALLBACK_TIMEOUT = int(os.getenv('BUILDER_CALLBACK_TIMEOUT', '10'))

    # In-memory editing sessions kept at once; the oldest is dropped beyond this
    BUILDER_MAX_SESSIONS = int(os.getenv('BUILDER_MAX_SESSIONS', '200'))

    # Persistent log store (sqlite). Leave unset to log to the console only.
    LOG_DB = os.getenv('LOG_DB')

    # Keys copied into app.config by BlockMail.init_app when missing
    APP_KEYS = (
        'SECRET_KEY',
        'BUILDER_ALLOWED_ORIGINS',
        'BUILDER_HOST_CALLBACK_URL',
        'BUILDER_CALLBACK_TIMEOUT',
        'BUILDER_MAX_SESSIONS',
        'LOG_DB',
    )
