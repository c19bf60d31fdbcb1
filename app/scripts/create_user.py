"""
Create a user or reset an existing user's password from the shell. Run from project root:
  python -m app.scripts.create_user LOGIN PASSWORD [role]
Example:
  python -m app.scripts.create_user alice s3cret ADMINISTRATOR
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import LOGIN_MAX_LEN, PASSWORD_MAX_LEN
from app.models import Role
from app.services.accounts import (
    AccountExistsError,
    change_password,
    change_role,
    register_user,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Gatekeeper user.")
    parser.add_argument("login", help=f"Login (1-{LOGIN_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role]
    )
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="If the login exists, set its password instead of failing.",
    )
    args = parser.parse_args(argv)

    login = args.login.strip()
    if not login or len(login) > LOGIN_MAX_LEN:
        print("Invalid login length.", file=sys.stderr)
        return 1
    if not args.password or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be 1-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    role = Role(args.role)
    db = SessionLocal()
    try:
        try:
            user = register_user(db, login, args.password)
        except AccountExistsError:
            if not args.reset_password:
                print(f"User '{login}' already exists.", file=sys.stderr)
                return 1
            user = change_password(db, login, args.password)
            print(f"Password reset for '{login}'.")
        # An existing account may hold any role; always apply the requested one.
        if user.role is not role:
            user = change_role(db, login, role)
        print(f"User '{login}' has role '{user.role.value}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
