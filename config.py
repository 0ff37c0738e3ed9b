import os
from datetime import timedelta
from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
# Use override=True to ensure .env values override any system environment variables
load_dotenv(os.path.join(basedir, '.env'), override=True)


def _database_uri():
    """Build the database URI from DATABASE_URL or the individual DATABASE_* settings."""
    url = os.environ.get('DATABASE_URL')
    if url:
        return url

    db_user = os.environ.get('DATABASE_USER')
    db_password = os.environ.get('DATABASE_PASSWORD')
    db_host = os.environ.get('DATABASE_HOST')
    db_name = os.environ.get('DATABASE_NAME')

    if all([db_user, db_host, db_name]):
        if db_password:
            return f'mysql+pymysql://{db_user}:{db_password}@{db_host}/{db_name}'
        return f'mysql+pymysql://{db_user}@{db_host}/{db_name}'

    return 'sqlite:///' + os.path.join(basedir, 'library_admin.db')


class Config:
    ENV = os.environ.get('FLASK_ENV', 'development')
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'

    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600
    WTF_CSRF_SSL_STRICT = False

    # Session Security Configuration
    # Note: Set SESSION_COOKIE_SECURE = True in production with HTTPS
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'False').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 43200  # 12 hours

    REMEMBER_COOKIE_DURATION = timedelta(seconds=43200)
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'False').lower() == 'true'

    SECURITY_HEADERS = {
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'SAMEORIGIN',
        'Referrer-Policy': 'strict-origin-when-cross-origin',
        'Strict-Transport-Security': 'max-age=31536000; includeSubDomains',
        'Cross-Origin-Opener-Policy': 'same-origin',
        'Cross-Origin-Resource-Policy': 'same-origin',
    }

    CONTENT_SECURITY_POLICY = {
        'default-src': ["'self'"],
        'script-src': ["'self'"],
        'style-src': ["'self'", "'unsafe-inline'"],  # inline styles in the base template
        'img-src': ["'self'", "data:"],
        'frame-ancestors': ["'none'"],
        'form-action': ["'self'"],
        'object-src': ["'none'"],
        'base-uri': ["'self'"],
    }

    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_STRATEGY = "fixed-window"
    RATELIMIT_HEADERS_ENABLED = True

    # Only create/delete are limited; listing and form pages are not
    RATELIMIT_ADMIN_ACTION = "100 per hour"

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Database Connection Pool Configuration
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,           # Number of persistent connections to maintain
        'max_overflow': 20,        # Additional connections allowed when pool is full
        'pool_timeout': 30,        # Seconds to wait for a connection before error
        'pool_recycle': 1800,      # Recycle connections after 30 minutes
        'pool_pre_ping': True,     # Check connection health before use
    }
    if SQLALCHEMY_DATABASE_URI.startswith('sqlite'):
        # SQLite uses a single-file pool; sizing options do not apply
        SQLALCHEMY_ENGINE_OPTIONS = {}

    # Error Handling Configuration
    PROPAGATE_EXCEPTIONS = None
    TRAP_HTTP_EXCEPTIONS = False
    TRAP_BAD_REQUEST_ERRORS = None

    LOG_DIR = os.environ.get('LOG_DIR', os.path.join(basedir, 'logs'))

    # Admin management
    STAFF_ADMIN_TYPE_KEY = 'staff_admin'
    ADMIN_LIST_PER_PAGE = 10
    ADMIN_LIST_MAX_PER_PAGE = 100

    # Password policy
    PASSWORD_MIN_LENGTH = 8
    # Reject passwords found in the Have I Been Pwned corpus
    PASSWORD_UNCOMPROMISED_CHECK = os.environ.get('PASSWORD_UNCOMPROMISED_CHECK', 'true').lower() == 'true'
    PWNED_PASSWORDS_API_URL = os.environ.get('PWNED_PASSWORDS_API_URL', 'https://api.pwnedpasswords.com/range/')
    PWNED_PASSWORDS_TIMEOUT = 5  # seconds


class DevelopmentConfig(Config):
    """Development environment configuration with relaxed security for debugging."""
    ENV = 'development'
    DEBUG = True
    TESTING = False

    SESSION_COOKIE_SECURE = False

    PROPAGATE_EXCEPTIONS = False  # Use Flask's error handlers
    TRAP_BAD_REQUEST_ERRORS = True


class ProductionConfig(Config):
    """Production environment configuration with maximum security."""
    ENV = 'production'
    DEBUG = False
    TESTING = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 20,
        'max_overflow': 40,
        'pool_timeout': 30,
        'pool_recycle': 1800,
        'pool_pre_ping': True,
    }

    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True
    WTF_CSRF_SSL_STRICT = True

    # Production: Use Redis for rate limiting
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', "redis://localhost:6379/1")

    # Production: Never expose error details
    PROPAGATE_EXCEPTIONS = False
    TRAP_HTTP_EXCEPTIONS = False
    TRAP_BAD_REQUEST_ERRORS = False


class TestingConfig(Config):
    """Testing environment configuration."""
    ENV = 'testing'
    TESTING = True
    DEBUG = False

    # Testing: Use in-memory database
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Testing: Disable CSRF for easier testing
    WTF_CSRF_ENABLED = False

    # Testing: Disable rate limiting
    RATELIMIT_ENABLED = False

    # Testing: Never call out to the compromised-password service
    PASSWORD_UNCOMPROMISED_CHECK = False


# Configuration dictionary for easy selection
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
