"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_CORS_ORIGINS = [
    'https://hgm-gate.webeesign.com',
    'https://hgm-management.webeesign.com',
    'http://localhost:3000',
    'http://localhost:3001',
]


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '0') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    JSON_SORT_KEYS = False

    # Database - Support multiple environment variable naming conventions
    # Priority: DATABASE_URL > DB_* > POSTGRES_*
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        DB_HOST = os.getenv('DB_HOST') or os.getenv('POSTGRES_HOST', 'db')
        DB_PORT = os.getenv('DB_PORT') or os.getenv('POSTGRES_PORT', '5432')
        DB_NAME = os.getenv('DB_NAME') or os.getenv('POSTGRES_DB', 'hgm')
        DB_USER = os.getenv('DB_USER') or os.getenv('POSTGRES_USER', 'hgmuser')
        DB_PASSWORD = (
            os.getenv('DB_PASSWORD')
            or os.getenv('DB_PASS')
            or os.getenv('POSTGRES_PASSWORD', 'hgmpw')
        )

        DATABASE_URL = (
            f"postgresql://{DB_USER}:{DB_PASSWORD}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'
    DB_POOL_SIZE = int(os.getenv('DB_POOL_SIZE', '10'))
    DB_MAX_OVERFLOW = int(os.getenv('DB_MAX_OVERFLOW', '20'))

    # CORS (comma-separated list of allowed origins)
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', ','.join(DEFAULT_CORS_ORIGINS)).split(',')
        if origin.strip()
    ]

    # Order numbers: ORD-0001, ORD-0002, ...
    ORDER_NUMBER_PREFIX = os.getenv('ORDER_NUMBER_PREFIX', 'ORD')
    ORDER_NUMBER_PAD_WIDTH = int(os.getenv('ORDER_NUMBER_PAD_WIDTH', '4'))
    # 'max_scan' (MAX(...)+1, best effort) or 'counter' (locked counter row)
    ORDER_NUMBER_STRATEGY = os.getenv('ORDER_NUMBER_STRATEGY', 'max_scan')

    ORDERS_LIST_LIMIT = int(os.getenv('ORDERS_LIST_LIMIT', '200'))

    # Logging / error tracking
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    SENTRY_DSN = os.getenv('SENTRY_DSN')
