"""
Configuration module for the application.
All configuration values are read from environment variables.
"""
import os
import secrets
import warnings


def _env_bool(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "")
    return int(value) if value else default


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Generate a development SECRET_KEY if not set and in development mode
        if not self.SECRET_KEY and self.FLASK_ENV != "production":
            self.SECRET_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "SECRET_KEY not set. Generated a temporary key for development. "
                "Set SECRET_KEY in your .env file for production!",
                UserWarning
            )

        # Database Configuration
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "")
        self.DB_USER: str = os.getenv("DB_USER", "")
        self.DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
        self.DB_HOST: str = os.getenv("DB_HOST", "")
        self.DB_PORT: str = os.getenv("DB_PORT", "")
        self.DB_NAME: str = os.getenv("DB_NAME", "")
        self.SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
        self.SQLALCHEMY_ECHO: bool = _env_bool("SQLALCHEMY_ECHO")

        # Token signing keys, one per purpose. Empty keys fall back to SECRET_KEY.
        self.JWT_USER_ACCESS_KEY: str = os.getenv("JWT_USER_ACCESS_KEY", "") or self.SECRET_KEY
        self.JWT_USER_ACTIVATION_KEY: str = os.getenv("JWT_USER_ACTIVATION_KEY", "") or self.SECRET_KEY
        self.JWT_RESET_PASSWORD_KEY: str = os.getenv("JWT_RESET_PASSWORD_KEY", "") or self.SECRET_KEY
        self.JWT_QUIZ_SECRET_KEY: str = os.getenv("JWT_QUIZ_SECRET_KEY", "") or self.SECRET_KEY

        # Token lifetimes
        self.ACCESS_TOKEN_MAX_AGE_DAYS: int = _env_int("ACCESS_TOKEN_MAX_AGE_DAYS", 180)
        self.ACTIVATION_TOKEN_MINUTES: int = _env_int("ACTIVATION_TOKEN_MINUTES", 60)
        self.RESET_TOKEN_MINUTES: int = _env_int("RESET_TOKEN_MINUTES", 20)
        self.SHARE_TOKEN_DAYS: int = _env_int("SHARE_TOKEN_DAYS", 7)

        # Password Validation
        self.MIN_PASSWORD_LENGTH: int = _env_int("MIN_PASSWORD_LENGTH", 6)
        self.MAX_PASSWORD_LENGTH: int = _env_int("MAX_PASSWORD_LENGTH", 50)
        self.BCRYPT_ROUNDS: int = _env_int("BCRYPT_ROUNDS", 12)

        # Application URLs (for links in emails and share links)
        self.FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173").rstrip("/")

        # Session cookie
        session_secure = os.getenv("SESSION_COOKIE_SECURE", "")
        self.SESSION_COOKIE_SECURE: bool = session_secure.lower() == "true" if session_secure else True
        self.SESSION_COOKIE_SAMESITE: str = os.getenv("SESSION_COOKIE_SAMESITE", "None")
        self.ACCESS_TOKEN_COOKIE: str = "access_token"

        # CORS
        cors_origins = os.getenv("CORS_ORIGINS", "")
        self.CORS_ORIGINS: list[str] = [o.strip() for o in cors_origins.split(",") if o.strip()] or [self.FRONTEND_URL]

        # Localization
        self.DEFAULT_LOCALE: str = os.getenv("DEFAULT_LOCALE", "en")
        self.SUPPORTED_LOCALES: list[str] = ["en", "ar"]

        # Whether non-owners see the correct option of each question
        self.INCLUDE_CORRECT_OPTIONS: bool = _env_bool("INCLUDE_CORRECT_OPTIONS")

        # Email Configuration (SMTP)
        self.SMTP_SERVER: str = os.getenv("SMTP_SERVER", "smtp.gmail.com")
        self.SMTP_PORT: int = _env_int("SMTP_PORT", 587)
        self.SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
        self.SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
        self.SMTP_FROM_EMAIL: str = os.getenv("SMTP_FROM_EMAIL", "")
        self.SMTP_USE_TLS: bool = _env_bool("SMTP_USE_TLS", "true")
        self.SMTP_USE_SSL: bool = _env_bool("SMTP_USE_SSL")
        self.EMAIL_ASYNC: bool = _env_bool("EMAIL_ASYNC", "true")
        self.EMAIL_SUPPRESS_SEND: bool = _env_bool("EMAIL_SUPPRESS_SEND")

    def reload(self) -> None:
        """Re-read the environment in place so modules holding `config` see new values."""
        self.__init__()

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct database URI from environment variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
        )

    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces secrets in production environment.
        """
        if self.FLASK_ENV != "production":
            return
        if not self.SECRET_KEY:
            raise ValueError(
                "SECRET_KEY environment variable is required in production. "
                "Set it in your .env file or environment variables."
            )
        for name in ("JWT_USER_ACCESS_KEY", "JWT_USER_ACTIVATION_KEY",
                     "JWT_RESET_PASSWORD_KEY", "JWT_QUIZ_SECRET_KEY"):
            if not os.getenv(name):
                raise ValueError(f"{name} environment variable is required in production.")


# Global config instance - re-initialized by create_app() after load_dotenv()
config = Config()
