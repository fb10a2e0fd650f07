"""
Create a user (e.g. first admin). Run from project root:
  python -m accounts.scripts.create_user FIRST LAST EMAIL PASSWORD [role]
Example:
  python -m accounts.scripts.create_user Jane Doe jane@example.com secret123 ADMIN
"""
import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from accounts.core.config import get_settings
from accounts.core.constants import DEFAULT_ROLE, Role
from accounts.core.database import SessionLocal
from accounts.schemas.user import UserRead
from accounts.services.users import DuplicateEmailError, UserValidationError, create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account (no registration UI).")
    parser.add_argument("first_name", help="First name (3-50 chars)")
    parser.add_argument("last_name", help="Last name (3-50 chars)")
    parser.add_argument("email", help="Email address, unique")
    parser.add_argument("password", help="Password (3-50 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=DEFAULT_ROLE.value,
        help=f"One of {', '.join(r.value for r in Role)} (case-insensitive)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    db = SessionLocal()
    try:
        user = create_user(
            db,
            {
                "first_name": args.first_name,
                "last_name": args.last_name,
                "email": args.email,
                "password": args.password,
                "role": args.role,
            },
            settings,
        )
    except UserValidationError as e:
        for err in e.errors:
            print(f"{err.field}: {err.message}", file=sys.stderr)
        return 1
    except DuplicateEmailError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user: {UserRead.model_validate(user).model_dump_json()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
