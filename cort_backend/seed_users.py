"""
Directory seeding script for privileged users.

Signup always creates EMPLOYEE accounts, so the first SUPER_ADMIN (and any
COMPANY_ADMIN) has to be registered here. The identity must already exist in
the identity provider; pass its subject id (UUID).

Usage:
    python -m cort_backend.seed_users --subject-id <uuid> --email admin@cort.com --full-name "Platform Admin"
    python -m cort_backend.seed_users --subject-id <uuid> --email ops@acme.com --full-name "Acme Ops" \
        --role COMPANY_ADMIN --company-name "Acme" --company-email contact@acme.com
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cort_backend.app.db.session import AsyncSessionLocal, engine, Base
from cort_backend.app.models.company import Company
from cort_backend.app.models.user import User
from cort_backend.app.models.enums import UserRole, UserStatus
# Register every table so create_all builds the full schema
from cort_backend.app.models.vehicle import Vehicle  # noqa: F401
from cort_backend.app.models.route import Route  # noqa: F401
from cort_backend.app.models.chauffeur_booking import ChauffeurBooking  # noqa: F401
from cort_backend.app.models.driver_profile import DriverProfile  # noqa: F401
from cort_backend.app.models.shuttle_contract import ShuttleContract  # noqa: F401
from sqlalchemy import select


async def seed_user(args: argparse.Namespace) -> int:
    """
    Seed one directory user.
    
    Creates:
    - the company (COMPANY_ADMIN only, reused if the email already exists)
    - the user with the requested role and ACTIVE status
    
    Returns:
        Process exit code
    """
    try:
        return await _seed(args)
    finally:
        await engine.dispose()


async def _seed(args: argparse.Namespace) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    role = UserRole(args.role)

    async with AsyncSessionLocal() as db:
        print("🌱 Starting user seeding...")

        result = await db.execute(select(User).where(User.id == args.subject_id))
        if result.scalar_one_or_none():
            print(f"ℹ️  User {args.subject_id} already exists, skipping seeding")
            return 0

        company_id = None
        if role == UserRole.COMPANY_ADMIN:
            if not (args.company_name and args.company_email):
                print("❌ COMPANY_ADMIN requires --company-name and --company-email")
                return 1

            result = await db.execute(select(Company).where(Company.email == args.company_email))
            company = result.scalar_one_or_none()
            if company is None:
                company = Company(name=args.company_name, email=args.company_email)
                db.add(company)
                await db.flush()
                print(f"✅ Created company {company.name} (id: {company.id})")
            company_id = company.id

        user = User(
            id=args.subject_id,
            email=args.email,
            full_name=args.full_name,
            role=role,
            company_id=company_id,
            status=UserStatus.ACTIVE.value,
        )
        db.add(user)
        await db.commit()
        print(f"✅ Created {role.value} user {args.email} (id: {args.subject_id})")

    return 0


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed a privileged directory user")
    parser.add_argument("--subject-id", required=True, help="Identity provider user id (UUID)")
    parser.add_argument("--email", required=True)
    parser.add_argument("--full-name", required=True)
    parser.add_argument(
        "--role",
        default=UserRole.SUPER_ADMIN.value,
        choices=[UserRole.SUPER_ADMIN.value, UserRole.COMPANY_ADMIN.value],
    )
    parser.add_argument("--company-name")
    parser.add_argument("--company-email")
    return parser.parse_args(argv)


if __name__ == "__main__":
    sys.exit(asyncio.run(seed_user(parse_args())))
