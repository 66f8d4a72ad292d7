"""
Doku@WEB Gateway - Configuration Management
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # FastAPI
    fastapi_env: str = "development"
    fastapi_host: str = "0.0.0.0"
    fastapi_port: int = 8000

    # Doku@WEB
    dokuweb_base_url: str = "https://dokuweb.datasec.de/api"
    dokuweb_soap_wsdl: str = "https://dokuweb.datasec.de/api/webservices/Tickets.cfc?wsdl"
    dokuweb_username: str = ""
    dokuweb_password: str = ""
    dokuweb_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @property
    def dokuweb_configured(self) -> bool:
        """Whether API credentials are present"""
        return bool(self.dokuweb_username and self.dokuweb_password)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
