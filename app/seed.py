from __future__ import annotations

import argparse

import structlog

from app.config import get_settings
from app.db.session import init_db, session_factory
from app.observability.logging import configure_logging
from app.services.user_service import DEFAULT_USERS, seed_default_users


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the demo admin and regular user accounts")
    parser.add_argument("--skip-create-tables", action="store_true", help="Assume the schema already exists")
    args = parser.parse_args()

    configure_logging(get_settings().log_level)
    logger = structlog.get_logger("seed")

    if not args.skip_create_tables:
        init_db()

    with session_factory()() as db:
        outcome = seed_default_users(db)

    logger.info("seed_completed", created=[email for email, created in outcome if created])
    for data in DEFAULT_USERS:
        print(f"{data.role.value:<6} {data.email} / {data.password}")


if __name__ == "__main__":
    main()
