"""
Create a user directly in the database (e.g. the first admin, which
self-registration refuses). Run from project root:
  python -m pointsboard.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m pointsboard.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pointsboard.core.config import get_settings
from pointsboard.core.database import SessionLocal
from pointsboard.core.logging_config import configure_logging
from pointsboard.core.security import hash_password
from pointsboard.models import Role
from pointsboard.services.store import CredentialStore, StoreError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Pointsboard user (any role, including admin).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.ADMIN.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)
    configure_logging(get_settings())

    username = args.username.strip()
    email = args.email.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > 128:
        print("Password must be 1-128 characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        store = CredentialStore(db)
        if store.find_user(email=email, username=username) is not None:
            print(f"User '{username}' or email '{email}' already exists.", file=sys.stderr)
            return 1
        user = store.insert_user(
            username=username,
            email=email,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        logger.info("Created user", extra={"user_id": user.id, "role": user.role})
        print(f"Created user '{username}' (id={user.id}) with role '{args.role}'.")
        return 0
    except StoreError as e:
        print(f"Could not create user: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
