"""
Create a user (e.g. an extra admin). Run from project root:
  python -m cosmos.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m cosmos.scripts.create_user alice alice@example.com s3cret-pass admin
"""
import argparse
import sys

from dotenv import load_dotenv

from cosmos.core.config import get_settings
from cosmos.core.database import build_engine, build_session_factory
from cosmos.core.errors import CosmosError
from cosmos.repositories.users import create_user
from cosmos.schemas.user import UserForm


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Cosmos user (outside the admin UI).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (at least 6 characters, at most 72 bytes)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    load_dotenv()
    engine = build_engine(get_settings())
    db = build_session_factory(engine)()
    try:
        user = create_user(
            db,
            UserForm(
                username=args.username,
                email=args.email,
                password=args.password,
                role=args.role,
            ),
        )
    except CosmosError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()
    print(f"Created user '{user.username}' (id {user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
