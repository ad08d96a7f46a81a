# Run: jobsolution-init-db [--admin-email EMAIL --admin-password PASSWORD]
import argparse
import logging
import sys
from sqlalchemy.orm import Session
from jobsolution.config.config import settings
from jobsolution.config.database import SessionLocal, engine, transaction
from jobsolution.db import lookup_db
from jobsolution.db.industry_db import get_industry_by_name, create_industry
from jobsolution.db.migration_db import run_migrations
from jobsolution.db.user_db import get_user_by_email, create_user, hash_password
from jobsolution.models import all_models  # noqa: F401
from jobsolution.models.lookup_model import RatingCategory, BenefitType, EmploymentType, EmploymentPeriod
from jobsolution.models.user_model import ROLE_ADMIN

logger = logging.getLogger(__name__)

RATING_CATEGORIES = [
    ("Salary", "Pay level and its timeliness"),
    ("Management", "Quality of leadership and management"),
    ("Work-life balance", "Workload and flexibility"),
    ("Career growth", "Promotion and learning opportunities"),
    ("Team", "Atmosphere among colleagues"),
]

BENEFIT_TYPES = [
    ("Health insurance", "Voluntary medical insurance"),
    ("Remote work", "Option to work remotely"),
    ("Training", "Paid courses and conferences"),
    ("Meals", "Free or subsidized meals"),
    ("Fitness", "Gym or sports compensation"),
]

EMPLOYMENT_TYPES = [
    ("Full-time", None),
    ("Part-time", None),
    ("Contract", None),
    ("Internship", None),
]

EMPLOYMENT_PERIODS = [
    ("Less than 1 year", None),
    ("1-3 years", None),
    ("3-5 years", None),
    ("More than 5 years", None),
]

INDUSTRIES = [
    ("IT", "#2563eb"),
    ("Finance", "#16a34a"),
    ("Retail", "#f59e0b"),
    ("Manufacturing", "#6b7280"),
    ("Healthcare", "#dc2626"),
    ("Education", "#7c3aed"),
]


def seed_lookup(db: Session, model, rows) -> int:
    created = 0
    for name, description in rows:
        if not lookup_db.get_by_name(db, model, name):
            lookup_db.create(db, model, name, description)
            created += 1
    return created


def seed_reference_data(db: Session) -> int:
    created = 0
    with transaction(db):
        created += seed_lookup(db, RatingCategory, RATING_CATEGORIES)
        created += seed_lookup(db, BenefitType, BENEFIT_TYPES)
        created += seed_lookup(db, EmploymentType, EMPLOYMENT_TYPES)
        created += seed_lookup(db, EmploymentPeriod, EMPLOYMENT_PERIODS)
        for name, color in INDUSTRIES:
            if not get_industry_by_name(db, name):
                create_industry(db, name, color)
                created += 1
    return created


def ensure_admin(db: Session, email: str, password: str):
    """Create an admin account, or promote and re-password an existing one."""
    with transaction(db):
        user = get_user_by_email(db, email)
        if user is None:
            user = create_user(db, email=email, password=password, role=ROLE_ADMIN)
        else:
            user.role = ROLE_ADMIN
            user.password_hash = hash_password(password)
    return user


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Apply migrations and seed reference data")
    parser.add_argument("--admin-email", help="email of the admin account to create or promote")
    parser.add_argument("--admin-password", help="password for the admin account")
    parser.add_argument("--skip-migrations", action="store_true", help="do not apply pending migrations")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL)

    if bool(args.admin_email) != bool(args.admin_password):
        parser.error("--admin-email and --admin-password must be given together")
    if args.admin_password and len(args.admin_password) < 8:
        parser.error("--admin-password must be at least 8 characters")

    if not args.skip_migrations:
        run_migrations(engine, settings.MIGRATIONS_DIR)

    db = SessionLocal()
    try:
        created = seed_reference_data(db)
        logger.info(f"Seeded {created} reference rows")
        if args.admin_email:
            admin = ensure_admin(db, args.admin_email, args.admin_password)
            logger.info(f"Admin account ready: user {admin.id}")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
