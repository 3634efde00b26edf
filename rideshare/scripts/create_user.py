"""
Create a user (e.g. the first admin). Run from project root:
  python -m rideshare.scripts.create_user USERNAME PASSWORD FIRSTNAME LASTNAME [--email E] [--phone P] [--admin]
Example:
  python -m rideshare.scripts.create_user admin your-secure-password The Admin --admin
"""
import argparse
import logging
import sys

from rideshare.core.config import get_settings
from rideshare.core.database import SessionLocal
from rideshare.core.errors import RideshareError
from rideshare.schemas.user import UserCreate
from rideshare.services.accounts import AccountDirectory

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a rideshare user account.")
    parser.add_argument("username")
    parser.add_argument("password")
    parser.add_argument("firstname")
    parser.add_argument("lastname")
    parser.add_argument("--email", default=None)
    parser.add_argument("--phone", default=None)
    parser.add_argument(
        "--admin", action="store_true", help="Grant admin permissions"
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        accounts = AccountDirectory(db, get_settings())
        user_id = accounts.create(
            UserCreate(
                username=args.username.strip(),
                password=args.password,
                firstname=args.firstname,
                lastname=args.lastname,
                email=args.email,
                phone=args.phone,
            )
        )
        if args.admin:
            accounts.set_admin(user_id, True)
        role = "admin" if args.admin else "user"
        print(f"Created {role} '{args.username}' with id {user_id}.")
        return 0
    except RideshareError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
