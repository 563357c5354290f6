"""
Configuration management for the Convenia application
"""
import os
import tempfile
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _database_uri() -> str:
    """Build the MySQL URI from DB_* variables unless DATABASE_URL is set"""
    url = os.environ.get('DATABASE_URL')
    if url:
        return url
    return "mysql+pymysql://{user}:{password}@{host}/{name}".format(
        user=os.environ.get('DB_USER', 'root'),
        password=os.environ.get('DB_PASSWORD', ''),
        host=os.environ.get('DB_HOST', 'localhost'),
        name=os.environ.get('DB_NAME', 'convenia'),
    )


def _development_database_uri() -> str:
    """Local SQLite file unless DATABASE_URL or DB_HOST points at a server"""
    if os.environ.get('DATABASE_URL') or os.environ.get('DB_HOST'):
        return _database_uri()
    return 'sqlite:///' + os.path.join(BASE_DIR, 'convenia.db')


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    """Base configuration class"""

    # Flask Configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Session tokens
    JWT_SECRET = os.environ.get('JWT_SECRET') or 'dev-jwt-secret-change-me-before-deploying-convenia'
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_MIN = int(os.environ.get('JWT_EXPIRES_MIN', 1440))  # 24 hours
    REMEMBER_ME_DAYS = 30
    AUTH_COOKIE_NAME = 'token'
    AUTH_COOKIE_SECURE = False

    # Database Configuration
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'max_overflow': 0,
        'pool_timeout': 30,
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # CORS: only the UI origin, with credentials
    CORS_ORIGINS = _split_origins(os.environ.get('CORS_ORIGINS', 'http://localhost:3000'))

    # File Upload Configuration
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024  # 50MB per request body
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(BASE_DIR, 'uploads')
    MAX_DOCUMENTS_PER_REQUEST = 5
    ALLOWED_MIME_TYPES = {
        'application/pdf',
        'application/msword',
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
        'application/vnd.ms-excel',
        'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        'text/plain',
        'image/jpeg',
        'image/png',
    }

    # Bootstrap admin created by `flask init-db`
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    ADMIN_NAME = os.environ.get('ADMIN_NAME', 'Administrator')

    # Application Settings
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ['true', 'on', '1']
    TESTING = False

    @staticmethod
    def init_app(app):
        """Initialize application with configuration"""
        pass


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _development_database_uri()
    if SQLALCHEMY_DATABASE_URI.startswith('sqlite'):
        SQLALCHEMY_ENGINE_OPTIONS = {}


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    AUTH_COOKIE_SECURE = True
    SECRET_KEY = os.environ.get('SECRET_KEY')
    JWT_SECRET = os.environ.get('JWT_SECRET')

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

        # Ensure secrets are set in production
        if not app.config['SECRET_KEY']:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if not app.config['JWT_SECRET']:
            raise ValueError("JWT_SECRET environment variable must be set in production")


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET = 'test-jwt-secret-used-only-by-the-test-suite'
    UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), 'convenia-test-uploads')
    ADMIN_EMAIL = None
    ADMIN_PASSWORD = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
