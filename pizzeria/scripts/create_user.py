"""
Create a user with an explicit role (e.g. the first admin). Run from project root:
  python -m pizzeria.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m pizzeria.scripts.create_user "Pizza Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pizzeria.core.database import SessionLocal
from pizzeria.core.errors import ValidationError
from pizzeria.schemas.auth import Role, RoleEntry
from pizzeria.services.users import add_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Pizzeria user with an explicit role.")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("password", help="Password")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.DINER.value,
        choices=[r.value for r in Role if r is not Role.FRANCHISEE],
    )
    args = parser.parse_args(argv)

    name = args.name.strip()
    email = args.email.strip()
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not args.password:
        print("Password must not be empty.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = add_user(db, name, email, args.password, roles=[RoleEntry(role=Role(args.role))])
    except ValidationError as e:
        print(f"Could not create user '{email}': {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{email}' (id {user.id}) with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
