"""
Create a user directly in the store (e.g. the first admin). Run from project root:
  python -m catalog.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m catalog.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from catalog.core.config import get_settings
from catalog.core.database import build_engine, build_session_factory
from catalog.core.errors import CatalogError
from catalog.core.log_config import configure_logging
from catalog.core.security import PasswordHasher
from catalog.models.user import ROLES
from catalog.services.credentials import create_user, validate_registration

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a library catalog user (bypasses self-registration).")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Email address (stored exactly as given)")
    parser.add_argument("password", help="Password (at least 6 characters)")
    parser.add_argument("role", nargs="?", default="user", choices=list(ROLES))
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        validate_registration(args.name, args.email, args.password)
    except CatalogError as e:
        print(e.message, file=sys.stderr)
        return 1

    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        user = create_user(
            db,
            PasswordHasher.from_settings(settings),
            name=args.name.strip(),
            email=args.email,
            password=args.password,
            role=args.role,
        )
    except CatalogError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()
    logger.info("Created user via CLI: id=%s role=%s", user.id, user.role)
    print(f"Created user '{args.email}' with role '{args.role}' (id {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
