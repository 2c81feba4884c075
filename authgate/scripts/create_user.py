"""
Create a user, optionally with a role (signup never assigns one). Run from project root:
  python -m authgate.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m authgate.scripts.create_user admin your-secure-password ADMIN
"""
import argparse
import asyncio
import logging
import sys

from authgate.container import build_components
from authgate.core.config import get_settings
from authgate.core.database import create_tables
from authgate.core.exceptions import DuplicateUsername, StoreUnavailable, ValidationError
from authgate.schemas.auth import Role
from authgate.services.registration import register_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


async def _create(username: str, password: str, role: Role | None) -> int:
    settings = get_settings()
    components = build_components(settings)
    try:
        if settings.DB_AUTO_CREATE:
            await create_tables(components.engine)
        user = await register_user(components.store, components.hasher, username, password, role=role)
    except (ValidationError, DuplicateUsername) as e:
        print(e.message, file=sys.stderr)
        return 1
    except StoreUnavailable:
        logger.exception("Could not reach the user store")
        return 1
    finally:
        await components.engine.dispose()
    print(f"Created user '{user.username}' with role '{user.role.value if user.role else 'none'}'.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an authgate user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (1-72 bytes)")
    parser.add_argument("role", nargs="?", default=None, choices=[r.value for r in Role])
    args = parser.parse_args()

    role = Role(args.role) if args.role else None
    return asyncio.run(_create(args.username.strip(), args.password, role))


if __name__ == "__main__":
    sys.exit(main())
