"""
Application settings read from the environment.

`load_settings()` is the one place environment variables are read. A local
`.env` file is loaded first (real environment values win), then the values
are validated by the `Settings` model. Anything missing or malformed raises
`ConfigError` naming every offending variable.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator

DEFAULT_FILES_DIR = Path.home() / "bright-ants-files"

# Settings field -> environment variable.
ENV_VARS: dict[str, str] = {
    "database_url": "DATABASE_URL",
    "smtp_host": "SMTP_HOST",
    "smtp_port": "SMTP_PORT",
    "smtp_secure": "SMTP_SECURE",
    "smtp_user": "SMTP_USER",
    "smtp_pass": "SMTP_PASS",
    "email_from": "EMAIL_FROM",
    "email_to": "EMAIL_TO",
    "email_to_override": "EMAIL_TO_OVERRIDE",
    "files_dir": "FILES_DIR",
    "cors_origins": "CORS_ORIGINS",
    "log_level": "LOG_LEVEL",
}


class ConfigError(RuntimeError):
    pass


class Settings(BaseModel):
    database_url: str = Field(..., min_length=1)

    smtp_host: str = Field(..., min_length=1)
    smtp_port: int = Field(..., ge=1, le=65535)
    smtp_secure: bool = False
    smtp_user: str = Field(..., min_length=1)
    smtp_pass: str = Field(..., min_length=1)

    email_from: EmailStr | None = None
    email_to: EmailStr
    # Declared for test deployments: when set, contact mail goes here instead of `email_to`.
    email_to_override: EmailStr | None = None

    files_dir: Path = DEFAULT_FILES_DIR
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @field_validator("smtp_secure", mode="before")
    @classmethod
    def _parse_secure_flag(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("files_dir", mode="after")
    @classmethod
    def _expand_files_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("log_level", mode="after")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def sender_address(self) -> str:
        """
        Default outgoing-mail sender; falls back to the SMTP account.
        """
        return str(self.email_from or self.smtp_user)

    @property
    def contact_recipient(self) -> str:
        return str(self.email_to_override or self.email_to)


def _raw_values(environ: Mapping[str, str]) -> dict[str, str]:
    raw: dict[str, str] = {}
    for field_name, env_name in ENV_VARS.items():
        value = environ.get(env_name, "").strip()
        if value:
            raw[field_name] = value
    return raw


def _describe(exc: ValidationError) -> str:
    names: list[str] = []
    details: list[str] = []
    for error in exc.errors():
        field_name = str(error["loc"][0]) if error["loc"] else ""
        env_name = ENV_VARS.get(field_name, field_name)
        if env_name not in names:
            names.append(env_name)
        details.append(f"{env_name}: {error['msg']}")
    return (
        f"Missing or invalid environment variables: {', '.join(names)}\n"
        f"Details: {'; '.join(details)}"
    )


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build validated settings from `environ` (default: the process environment + `.env`).
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    try:
        return Settings.model_validate(_raw_values(environ))
    except ValidationError as exc:
        raise ConfigError(_describe(exc)) from exc
