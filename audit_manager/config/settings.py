from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

from audit_manager.core.errors import ConfigError


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # public (anon) key
    supabase_service_role_key: Optional[str] = None  # Required for admin operations like deleting auth users

    # Demo bootstrap
    demo_user_email: str = "yunus@demo.com"
    demo_user_password: str = "123"
    demo_user_full_name: str = "Yunus"

    # App
    app_name: str = "audit-manager"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def require_supabase_credentials(self) -> None:
        """Raise ConfigError unless both store URL and public key are set."""
        missing = []
        if not self.supabase_url.strip():
            missing.append("SUPABASE_URL")
        if not self.supabase_key.strip():
            missing.append("SUPABASE_KEY")
        if missing:
            raise ConfigError(f"Missing Supabase environment variables: {', '.join(missing)}")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
