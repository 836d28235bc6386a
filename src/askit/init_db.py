# src/askit/init_db.py
"""Create the schema and optionally bootstrap the first administrator.

Registration always yields USER accounts and only an ADMIN can promote, so a
fresh deployment needs one administrator created out of band.
"""

from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from askit.core.logging import configure_logging
from askit.core.security import hash_password
from askit.db.session import SessionLocal, create_tables
from askit.models import Role, User

logger = logging.getLogger(__name__)


def ensure_admin(db: Session, name: str, email: str, password: str) -> User:
    """Return the account for ``email`` promoted to ADMIN, creating it if missing."""
    user = db.execute(select(User).where(User.email == email)).scalars().first()
    if user is None:
        user = User(name=name, email=email, password=hash_password(password), role=Role.ADMIN)
        db.add(user)
        logger.info("Created administrator %s", email)
    else:
        user.role = Role.ADMIN
        logger.info("Promoted %s to administrator", email)
    db.commit()
    db.refresh(user)
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the AskIt database.")
    parser.add_argument("--admin-email", help="Create or promote this account to ADMIN")
    parser.add_argument("--admin-name", default="Administrator")
    parser.add_argument("--admin-password", help="Password for a newly created admin")
    args = parser.parse_args(argv)

    configure_logging()
    create_tables()
    logger.info("Database initialized")

    if args.admin_email:
        if not args.admin_password:
            parser.error("--admin-password is required with --admin-email")
        with SessionLocal() as db:
            ensure_admin(db, args.admin_name, args.admin_email, args.admin_password)
    return 0


if __name__ == "__main__":
    sys.exit(main())
