"""
Application Configuration

FLOW OVERVIEW
- Config.__init__
  • Reads FLASK_ENV to select which .env file to load (dev/prod). Testing bypasses file load.
- Properties expose configuration values, defaulting to sensible development-safe defaults.
"""

import os
from dotenv import load_dotenv


def _env_bool(name, default):
    return os.getenv(name, default).lower() in ('true', '1', 'yes', 'on')


class Config:
    """Base configuration class"""

    def __init__(self):
        # Load environment variables based on FLASK_ENV
        env_file = os.getenv('FLASK_ENV', 'development')
        if env_file == 'testing':
            # For testing, don't load config files, use environment variables directly
            pass
        elif env_file == 'production':
            load_dotenv('config.prod.env')
        else:
            load_dotenv('config.env')  # Default to development

    @property
    def ENV_NAME(self):
        """Deployment environment name reported by /api/status"""
        return os.getenv('FLASK_ENV', 'development')

    @property
    def SECRET_KEY(self):
        """Application secret key"""
        return os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        """SQLAlchemy database URL; replaces the MONGODB_URI of document-store deployments"""
        return os.getenv('DATABASE_URL', 'sqlite:///laptrack.db')

    @property
    def SQLALCHEMY_TRACK_MODIFICATIONS(self):
        """SQLAlchemy track modifications setting"""
        return False

    @property
    def JWT_SECRET_KEY(self):
        """Secret used to sign access tokens"""
        return os.getenv('JWT_SECRET', 'jwt-secret-key-change-in-production')

    @property
    def REFRESH_TOKEN_SECRET(self):
        """Secret used to sign refresh tokens"""
        return os.getenv('REFRESH_TOKEN_SECRET', 'refresh-secret-key-change-in-production')

    @property
    def JWT_ACCESS_TOKEN_EXPIRES(self):
        """JWT access token expiration time in seconds"""
        return int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 900))

    @property
    def JWT_REFRESH_TOKEN_EXPIRES(self):
        """JWT refresh token expiration time in seconds"""
        return int(os.getenv('JWT_REFRESH_TOKEN_EXPIRES', 604800))

    @property
    def BCRYPT_LOG_ROUNDS(self):
        """bcrypt work factor"""
        return int(os.getenv('BCRYPT_LOG_ROUNDS', 12))

    @property
    def PORT(self):
        """Port for the development server"""
        return int(os.getenv('PORT', 5000))

    @property
    def CORS_ORIGINS(self):
        """Allowed CORS origins (comma separated in the environment)"""
        origins = os.getenv('CORS_ORIGINS', '*')
        if origins.strip() == '*':
            return '*'
        return [origin.strip() for origin in origins.split(',') if origin.strip()]

    @property
    def RATELIMIT_ENABLED(self):
        """Whether Flask-Limiter enforces limits"""
        return _env_bool('RATELIMIT_ENABLED', 'True')

    @property
    def RATELIMIT_DEFAULT(self):
        """Default limit applied to every route"""
        return os.getenv('RATELIMIT_DEFAULT', '100 per 15 minutes')

    @property
    def RATELIMIT_STORAGE_URI(self):
        """Rate limit counter storage (use redis:// in multi-process deployments)"""
        return os.getenv('RATELIMIT_STORAGE_URI', 'memory://')

    @property
    def RATELIMIT_HEADERS_ENABLED(self):
        """Send X-RateLimit-* headers"""
        return True

    @property
    def AUTH_RATE_LIMIT(self):
        """Stricter limit for login/register/refresh"""
        return os.getenv('AUTH_RATE_LIMIT', '10 per minute')

    @property
    def LOG_LEVEL(self):
        """Log level for the laptrack loggers"""
        return os.getenv('LOG_LEVEL', 'INFO')

    @property
    def DEFAULT_PAGE_SIZE(self):
        """Default page size for list endpoints"""
        return int(os.getenv('DEFAULT_PAGE_SIZE', 20))

    @property
    def MAX_PAGE_SIZE(self):
        """Upper bound for per_page"""
        return int(os.getenv('MAX_PAGE_SIZE', 100))

    @property
    def MAX_CONTENT_LENGTH(self):
        """Maximum accepted request body in bytes"""
        return int(os.getenv('MAX_CONTENT_LENGTH', 1024 * 1024))
