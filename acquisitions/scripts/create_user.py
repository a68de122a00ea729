"""
Create a user (e.g. first admin) without going through the HTTP API. Run from project root:
  python -m acquisitions.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m acquisitions.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import sys

from pydantic import ValidationError

from acquisitions.core.config import get_settings
from acquisitions.core.database import SessionLocal
from acquisitions.core.errors import DuplicateEmailError
from acquisitions.schemas.auth import SignupRequest
from acquisitions.services.accounts import signup


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Acquisitions user account.")
    parser.add_argument("name", help="Display name (2-255 chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    try:
        body = SignupRequest(
            name=args.name,
            email=args.email,
            password=args.password,
            role=args.role,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        result = signup(db, get_settings(), body)
    except DuplicateEmailError:
        print(f"User '{body.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user '{result.user.email}' (id={result.user.id}) with role '{result.user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
