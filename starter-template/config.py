import os
from dotenv import load_dotenv

load_dotenv()

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)

DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    SESSION_COOKIE_SECURE = IS_PRODUCTION

    # Storefront API the panel manages
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:5000/api')
    API_TIMEOUT = int(os.getenv('API_TIMEOUT', '15'))

    # Audit log
    DB_DIR = DB_DIR
    LOG_DB = os.path.join(DB_DIR, 'backoffice_logs.db')

    BRAND_NAME = os.getenv('BRAND_NAME', 'Musshk Admin')
