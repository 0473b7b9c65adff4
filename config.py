from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Panel settings: where the records backend lives, how pages and toasts
    behave, and how long browser sessions are kept. Values come from the
    environment or a local .env file.
    """
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    APP_TITLE: str = "Records Admin Panel"

    # REST backend (json-server style) that owns the records
    API_BASE_URL: str = "http://localhost:3000"

    # Panel behaviour
    PAGE_SIZE: int = 10
    NOTIFICATION_SECONDS: int = 3 # How long a toast stays visible

    # Browser sessions
    SESSION_COOKIE_NAME: str = "panel_session"
    SESSION_MAX: int = 1000 # Least recently used sessions are dropped beyond this
    SESSION_IDLE_SECONDS: int = 1800

    LOG_LEVEL: str = "INFO"

settings = Settings()
