"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "TicketDesk"
    app_version: str = "1.0.0"
    debug: bool = True

    # Storage
    storage_type: str = "local"  # local, memory
    local_storage_path: str = "./data"
    session_storage_key: str = "ticketapp_session"
    tickets_storage_key: str = "ticketapp_tickets"

    # Authentication (demo-grade, no credential records)
    session_ttl_hours: int = 24
    password_min_length: int = 6
    demo_email: str = "demo@test.com"
    demo_password: str = "password"

    # Ticket validation limits
    title_max_length: int = 100
    description_max_length: int = 500

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/ticketdesk.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_api_requests: bool = True  # Log all API requests/responses

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
