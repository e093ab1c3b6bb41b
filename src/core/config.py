from os import environ

from pydantic import BaseModel, ConfigDict, field_validator

from core.models.notification import SUPPORTED_LOCALES


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    db_host: str
    db_port: int
    db_name: str
    db_user: str
    db_password: str
    db_secret_arn: str | None = None
    front_base_url: str
    api_base_url: str
    mail_transport: str = "log"
    mail_sender_name: str
    mail_sender_address: str
    mail_locale: str = "pt-BR"
    ses_endpoint: str | None = None
    notification_timeout_seconds: float = 10.0
    environment: str

    @field_validator("front_base_url", "api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("mail_transport")
    @classmethod
    def known_transport(cls, value: str) -> str:
        if value not in ("log", "ses"):
            raise ValueError(f"unknown mail transport: {value}")
        return value

    @field_validator("mail_locale")
    @classmethod
    def supported_locale(cls, value: str) -> str:
        if value not in SUPPORTED_LOCALES:
            raise ValueError(f"unsupported mail locale: {value} (expected one of {', '.join(SUPPORTED_LOCALES)})")
        return value


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config — for testing only."""
    global _cached_config
    _cached_config = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        db_host=environ.get("DB_HOST", "localhost"),
        db_port=int(environ.get("DB_PORT", "5432")),
        db_name=environ.get("DB_NAME", "planner"),
        db_user=environ.get("DB_USER", "planner"),
        db_password=environ.get("DB_PASSWORD", "localdev"),
        db_secret_arn=environ.get("DB_SECRET_ARN"),
        front_base_url=environ.get("FRONT_BASE_URL", "http://localhost:3000"),
        api_base_url=environ.get("API_BASE_URL", "http://localhost:3333"),
        mail_transport=environ.get("MAIL_TRANSPORT", "log"),
        mail_sender_name=environ.get("MAIL_SENDER_NAME", "Equipe Plann.er"),
        mail_sender_address=environ.get("MAIL_SENDER_ADDRESS", "oi@planner.com.br"),
        mail_locale=environ.get("MAIL_LOCALE", "pt-BR"),
        ses_endpoint=environ.get("SES_ENDPOINT"),
        notification_timeout_seconds=float(environ.get("NOTIFICATION_TIMEOUT_SECONDS", "10")),
        environment=environ.get("ENVIRONMENT", "local"),
    )
    return _cached_config
