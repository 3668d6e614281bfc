from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # App
    app_name: str = "routeauth"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_dir: str = "/var/log/routeauth"
    file_logging: bool = False

    # Navigation
    login_path: str = "/login"

    # Routes that skip the guard entirely
    public_routes: str = "/login,/register,/forgot-password"

    @property
    def public_routes_list(self) -> list[str]:
        return [route.strip() for route in self.public_routes.split(",") if route.strip()]

    # Denial audit trail
    denial_log_capacity: int = 100

    # Route table declaration (YAML); built-in table when unset
    route_config_path: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="ROUTEAUTH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
