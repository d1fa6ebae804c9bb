"""
Seed demo data: an admin account and a blog post template. Safe to re-run.

  python -m app.scripts.seed

The admin password comes from SEED_ADMIN_PASSWORD (default only suitable for dev).
"""

import logging
import os
import sys

from app.core.database import session_scope
from app.core.roles import Role
from app.models import Template, User

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

DEMO_ADMIN = {"username": "admin", "email": "admin@example.com"}
DEMO_TEMPLATE = {
    "name": "Blog Post",
    "description": "Template for blog posts",
    "components": {"header": True, "footer": True, "sidebar": False},
}


def seed(db) -> tuple[bool, bool]:
    """Insert the demo admin and template if missing. Returns (admin_created, template_created)."""
    admin_created = template_created = False
    if db.query(User).filter(User.username == DEMO_ADMIN["username"]).first() is None:
        admin = User(
            username=DEMO_ADMIN["username"],
            email=DEMO_ADMIN["email"],
            role=Role.ADMIN.value,
            is_verified=True,
        )
        admin.password = os.environ.get("SEED_ADMIN_PASSWORD", "change-me-admin")
        db.add(admin)
        admin_created = True
    if db.query(Template).filter(Template.name == DEMO_TEMPLATE["name"]).first() is None:
        db.add(Template(**DEMO_TEMPLATE))
        template_created = True
    return admin_created, template_created


def main() -> int:
    try:
        with session_scope() as db:
            admin_created, template_created = seed(db)
        logger.info(
            "Seed completed: admin_created=%s template_created=%s",
            admin_created,
            template_created,
        )
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
