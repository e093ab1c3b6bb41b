#!/usr/bin/env python3
"""Prepare local development resources.

Creates the trips/participants tables in the local PostgreSQL database from
the ORM models and, when SES_ENDPOINT points at a local SES emulator,
verifies the sender identity so the ses mail transport can send.

Usage:
    python scripts/create_local_env.py
"""

import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError
from sqlalchemy import create_engine, text

# Add src to path for config import
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import get_config
from core.db import Base


def create_tables(config):
    """Create trips and participants tables if they do not exist."""
    url = (
        f"postgresql+psycopg://{config.db_user}:{config.db_password}"
        f"@{config.db_host}:{config.db_port}/{config.db_name}"
    )
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS pgcrypto"))
    Base.metadata.create_all(engine)
    engine.dispose()
    print(f"✓ Tables ready: {', '.join(sorted(Base.metadata.tables))}")


def verify_sender_identity(config):
    """Verify the sender address against a local SES emulator."""
    ses = boto3.client(
        "ses",
        endpoint_url=config.ses_endpoint,
        region_name=config.aws_region,
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )
    try:
        ses.verify_email_identity(EmailAddress=config.mail_sender_address)
        print(f"✓ Verified sender {config.mail_sender_address}")
    except ClientError as e:
        if e.response["Error"]["Code"] == "AlreadyExists":
            print(f"✓ Sender {config.mail_sender_address} already verified")
        else:
            raise


def main():
    config = get_config()

    print(f"Preparing database {config.db_name} at {config.db_host}:{config.db_port}...")
    create_tables(config)

    if config.ses_endpoint:
        print(f"Preparing SES at {config.ses_endpoint}...")
        verify_sender_identity(config)

    print()
    print("✅ Local environment ready")


if __name__ == "__main__":
    main()
