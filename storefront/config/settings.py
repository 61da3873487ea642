from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Storefront configuration using Pydantic BaseSettings.
    Values are loaded from environment variables (and an optional .env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Settings
    PROJECT_NAME: str = "Storefront Cart Engine"
    ENVIRONMENT: str = Field("development", description="Entorno de ejecución (development, test, production)")
    DEBUG: bool = Field(False, description="Modo debug")

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Nivel de logging (DEBUG, INFO, WARNING, ERROR)")
    LOG_FORMAT: str = Field("colored", description="Formato de logs: colored, json o plain")
    LOG_FILE: str | None = Field(None, description="Archivo opcional para logs en formato JSON")

    # Cache Settings
    CART_CACHE_REGION: str = Field("CartRegion", description="Región de caché para carritos")
    API_CACHE_REGION: str = Field("ApiRegion", description="Región de caché para respuestas de APIs remotas")
    CART_CACHE_TTL_SECONDS: int = Field(300, description="TTL de carritos en caché (segundos)")
    API_CACHE_TTL_SECONDS: int = Field(60, description="TTL de respuestas de APIs en caché (segundos)")
    CACHE_MAX_ENTRIES: int = Field(10000, description="Máximo de entradas por región antes de evictar (LRU)")

    # Cart Settings
    DEFAULT_CART_NAME: str = Field("default", description="Nombre de carrito por defecto")
    ANONYMOUS_USERNAME: str = Field("Anonymous", description="Nombre de cliente para carritos anónimos")

    # Catalog Settings
    CATALOG_DEFAULT_PAGE_SIZE: int = Field(20, description="Tamaño de página por defecto del catálogo")

    # Cart module API (remote cart store)
    CART_API_BASE_URL: str | None = Field(None, description="URL base de la API del módulo de carritos")
    CART_API_KEY: str | None = Field(None, description="API key para el módulo de carritos")
    CART_API_TIMEOUT: int = Field(30, description="Timeout de requests al módulo de carritos en segundos")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normaliza y valida el nivel de logging"""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return level

    @field_validator("CATALOG_DEFAULT_PAGE_SIZE", "CACHE_MAX_ENTRIES")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @computed_field
    @property
    def is_development(self) -> bool:
        """Determina si está en modo desarrollo"""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    @computed_field
    @property
    def cache_region_ttls(self) -> dict[str, int]:
        """TTL por región de caché"""
        return {
            self.CART_CACHE_REGION: self.CART_CACHE_TTL_SECONDS,
            self.API_CACHE_REGION: self.API_CACHE_TTL_SECONDS,
        }


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Retorna una instancia cacheada de la configuración.
    Esto evita cargar las variables de entorno múltiples veces.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
