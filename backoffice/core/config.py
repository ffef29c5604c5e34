import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the backoffice.
    Host apps can override any of these through app.config or environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Storefront REST API
    API_BASE_URL = os.getenv('API_BASE_URL', 'https://api.musshk.com/api')
    API_TIMEOUT = int(os.getenv('API_TIMEOUT', '15'))
    API_LOGIN_PATH = os.getenv('API_LOGIN_PATH', '/auth/login')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Application log database
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, "backoffice_logs.db"))
    LOGS_TABLE = "app_logs"

    # Branding
    BRAND_NAME = os.getenv('BRAND_NAME', 'Musshk Admin')
    CURRENCY_PREFIX = os.getenv('CURRENCY_PREFIX', 'Rs.')

    # Port for local server (optional, projects can set this)
    port = int(os.getenv('PORT', '5000'))


# Keys copied into app.config when the host app has not set them
DEFAULT_KEYS = [
    'API_BASE_URL',
    'API_TIMEOUT',
    'API_LOGIN_PATH',
    'DB_DIR',
    'LOG_DB',
    'BRAND_NAME',
    'CURRENCY_PREFIX',
]


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)
