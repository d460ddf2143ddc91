# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Base de configuración (Pydantic v2) para el backend de HelldiversBoost.
- Esta clase NO instancia singletons ni resuelve .env; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.

Autor: HelldiversBoost
Fecha: 2026-02-10
"""

from typing import Literal, Optional
from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="HelldiversBoost API", validation_alias="APP_NAME")
    app_version: str = Field(default="1.0.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # Base de datos (PostgreSQL)
    # =========================
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: SecretStr = Field(default=SecretStr("postgres"), validation_alias="DB_PASSWORD")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="helldivers_boost", validation_alias="DB_NAME")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_sslmode: str = Field(default="prefer", validation_alias="DB_SSLMODE")  # prefer|require|disable
    db_url: Optional[str] = Field(default=None, validation_alias="DB_URL")
    db_command_timeout_s: float = Field(default=5.0, validation_alias="DB_COMMAND_TIMEOUT_S")

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        """
        Genera la URL de conexión completa para SQLAlchemy async.
        Prioriza DB_URL si existe, sino construye desde componentes individuales.
        Una DB_URL sqlite (tests locales) se respeta tal cual.
        """
        from urllib.parse import quote_plus

        if self.db_url:
            url = self.db_url
            if url.startswith("sqlite"):
                return url
            return (
                url.replace("postgres://", "postgresql+asyncpg://")
                   .replace("postgresql://", "postgresql+asyncpg://")
            )

        pw = quote_plus(self.db_password.get_secret_value())
        return (
            f"postgresql+asyncpg://{self.db_user}:{pw}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================
    # Redis (rate limiting compartido)
    # =========================
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")
    rate_limit_enabled: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")

    # =========================
    # CORS
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # =========================
    # Email
    # =========================
    email_mode: Literal["console", "api"] = Field(default="console", validation_alias="EMAIL_MODE")
    email_timeout_sec: int = Field(default=30, validation_alias="EMAIL_TIMEOUT_SEC")
    email_from: str = Field(default="orders@helldivers-boost.com", validation_alias="EMAIL_FROM")
    email_from_name: str = Field(default="HellDivers 2 Boosting", validation_alias="EMAIL_FROM_NAME")

    # MailerSend API (solo aplica si email_mode == "api")
    mailersend_api_key: Optional[SecretStr] = Field(default=None, validation_alias="MAILERSEND_API_KEY")

    # =========================
    # Observabilidad / Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    # ===== Utilidad para normalizar CORS =====
    def get_cors_origins(self) -> list[str]:
        """Convierte allowed_origins en lista procesable para CORS middleware."""
        if not self.allowed_origins or self.allowed_origins == "*":
            return ["*"]
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    def _security_checks(self) -> None:
        """
        Validaciones mínimas de coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        import logging
        logger = logging.getLogger(__name__)

        if self.is_prod:
            if self.db_sslmode != "require":
                raise ValueError("DB_SSLMODE debe ser 'require' en producción")
            if self.allowed_origins.strip() == "*":
                raise ValueError("CORS_ORIGINS no puede ser '*' en producción")

        if self.email_mode == "api" and not self.mailersend_api_key:
            raise ValueError("EMAIL_MODE=api requiere MAILERSEND_API_KEY.")

        if not self.redis_url and not self.is_test:
            logger.warning("REDIS_URL not configured; order rate limiting is disabled (fail-open)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName"]
# Fin del archivo backend/app/shared/config/settings_base.py
