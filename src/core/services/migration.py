"""Apply the Alembic revisions to the trips database. Backs the migrate Lambda."""

import io
import json
import logging
import os

from alembic.config import Config as AlembicConfig

from alembic import command
from core.clients import get_secrets_client
from core.config import _reset_config, get_config

logger = logging.getLogger(__name__)

# Secrets Manager RDS secret keys mapped to the env vars get_config() reads
_SECRET_ENV = {
    "username": "DB_USER",
    "password": "DB_PASSWORD",
    "host": "DB_HOST",
    "port": "DB_PORT",
    "dbname": "DB_NAME",
}


def _load_credentials_from_secret(secret_arn: str) -> None:
    """Copy the database secret into the DB_* env vars and drop the cached config."""
    response = get_secrets_client().get_secret_value(SecretId=secret_arn)
    secret = json.loads(response["SecretString"])
    for key, env_var in _SECRET_ENV.items():
        if key in secret:
            os.environ[env_var] = str(secret[key])
    # alembic/env.py builds its URL from get_config()
    _reset_config()
    logger.info("Loaded database credentials from %s", secret_arn)


def run_migrations(config_path: str = "/var/task/alembic.ini") -> dict[str, str]:
    secret_arn = get_config().db_secret_arn
    if secret_arn:
        _load_credentials_from_secret(secret_arn)

    alembic_cfg = AlembicConfig(config_path)
    alembic_cfg.set_main_option("script_location", os.path.join(os.path.dirname(config_path), "alembic"))

    captured = io.StringIO()
    stream_handler = logging.StreamHandler(captured)
    alembic_logger = logging.getLogger("alembic")
    alembic_logger.addHandler(stream_handler)

    try:
        command.upgrade(alembic_cfg, "head")
    except Exception as e:
        logger.error("Migration failed: %s", e)
        raise
    finally:
        alembic_logger.removeHandler(stream_handler)

    output = captured.getvalue()
    logger.info("Migration complete: %s", output)
    return {"status": "success", "output": output}
