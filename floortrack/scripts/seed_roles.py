"""
Seed Roles Script
Populates the roles table from floortrack/config/roles_config.py.
Run with: python -m floortrack.scripts.seed_roles
"""

import sys
import logging

from floortrack.config.roles_config import ROLES
from floortrack.database.supabase_client import get_supabase_admin
from supabase import Client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_roles(supabase: Client):
    """Create missing roles and refresh descriptions of existing ones"""
    logger.info("Seeding roles...")

    created_count = 0
    updated_count = 0
    failed = []

    for role in ROLES:
        try:
            existing = supabase.table("roles")\
                .select("id")\
                .eq("name", role["name"])\
                .execute()

            if existing.data:
                supabase.table("roles")\
                    .update({"description": role["description"]})\
                    .eq("name", role["name"])\
                    .execute()
                updated_count += 1
                logger.debug(f"Updated role: {role['name']}")
            else:
                supabase.table("roles").insert({
                    "name": role["name"],
                    "description": role["description"]
                }).execute()
                created_count += 1
                logger.debug(f"Created role: {role['name']}")
        except Exception as e:
            logger.error(f"Error processing role {role['name']}: {e}")
            failed.append(role["name"])

    logger.info(f"Roles seeded: {created_count} created, {updated_count} updated")
    return created_count, updated_count, failed


def main():
    supabase = get_supabase_admin()
    _, _, failed = seed_roles(supabase)
    if failed:
        logger.error(f"Seeding failed for roles: {', '.join(failed)}")
        sys.exit(1)
    logger.info("Seeding completed successfully!")


if __name__ == "__main__":
    main()
