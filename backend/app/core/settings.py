import os


class Settings:
    def __init__(self):
        self.app_name = "SwiftInvoice"
        self.api_version = "1.0.0"
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.secret_key = os.getenv("SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./swiftinvoice.db")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        # Shared secret the external cron runner sends as a bearer token
        self.cron_secret = os.getenv("CRON_SECRET", "")
        self.public_base_url = os.getenv("PUBLIC_BASE_URL", "http://localhost:3000")

        # Billing policy
        self.invoice_due_days = 30
        self.invoice_number_max_attempts = 10
        self.invoice_create_max_retries = 3
        self.invoice_create_retry_delay_seconds = 0.1


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
