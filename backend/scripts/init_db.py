#!/usr/bin/env python
"""
Database Initialization Script

Prepares an Adrevolution database:
1. Creates the PostgreSQL database named in DATABASE_URL if it is missing
2. Applies the Flask-Migrate migrations
3. Optionally registers a company owner through the regular sign-up path
4. Optionally provisions a company for an existing user who has none

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --create-owner
    OWNER_EMAIL=owner@example.com OWNER_PASSWORD=Secret123 \
        python scripts/init_db.py --create-owner --non-interactive
    python scripts/init_db.py --provision-user someone@example.com
    python scripts/init_db.py --drop-all --create-owner      # DANGEROUS

Environment Variables (--non-interactive):
    OWNER_EMAIL, OWNER_PASSWORD (required), OWNER_FIRST_NAME,
    OWNER_LAST_NAME, OWNER_COMPANY_NAME
"""

import os
import sys
import argparse
import getpass
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from marshmallow import ValidationError
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from flask_migrate import upgrade as migrate_upgrade
from adrevolution import create_app
from adrevolution.extensions import db
from adrevolution.schemas.user_schema import sign_up_schema
from adrevolution.services.auth_service import AuthService
from adrevolution.services.provisioning_service import ProvisioningService
from adrevolution.services.user_service import UserService
from adrevolution.utils.errors import AppError

MIGRATIONS_DIR = backend_dir / 'migrations'
CORE_TABLES = ('users', 'companies', 'company_memberships', 'user_positions', 'permissions')
CONFIRMATION = 'DELETE EVERYTHING'


def banner(title):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def parse_args():
    parser = argparse.ArgumentParser(
        description='Initialize the Adrevolution database',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--create-owner', action='store_true',
                        help='Register a company owner after migrating')
    parser.add_argument('--provision-user', metavar='EMAIL',
                        help='Provision a company for an existing user without one')
    parser.add_argument('--drop-all', action='store_true',
                        help='Drop every table first (asks for confirmation)')
    parser.add_argument('--non-interactive', action='store_true',
                        help='Read owner details from OWNER_* environment variables')
    parser.add_argument('--config', default=os.environ.get('FLASK_ENV', 'development'),
                        choices=['development', 'production', 'testing'],
                        help='Configuration to use (default: FLASK_ENV or development)')
    return parser.parse_args()


def ensure_database(database_url):
    """
    Create the target PostgreSQL database through the 'postgres' maintenance DB.

    Returns:
        True if the database was created
    """
    banner("STEP 1: Database")

    url = make_url(database_url)
    if not url.drivername.startswith('postgresql'):
        print(f"{url.drivername} database, nothing to create")
        return False

    engine = create_engine(url.set(database='postgres'), isolation_level='AUTOCOMMIT')
    try:
        with engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"), {'name': url.database}
            ).scalar()
            if exists:
                print(f"✓ Database '{url.database}' already exists")
                return False
            conn.execute(text(f'CREATE DATABASE "{url.database}"'))
    except OperationalError as e:
        print(f"ERROR: Could not connect to PostgreSQL at {url.host}:{url.port}: {e}")
        print("Check that PostgreSQL is running, DATABASE_URL is right and the role may CREATE DATABASE")
        sys.exit(1)
    finally:
        engine.dispose()

    print(f"✓ Database '{url.database}' created")
    return True


def run_migrations(app):
    banner("STEP 2: Migrations")

    if not (MIGRATIONS_DIR / 'env.py').exists():
        print(f"ERROR: No migrations environment in {MIGRATIONS_DIR}")
        sys.exit(1)

    with app.app_context():
        migrate_upgrade(directory=str(MIGRATIONS_DIR))
        tables = sorted(inspect(db.engine).get_table_names())

    print(f"✓ Schema up to date ({len(tables)} tables)")
    for table in tables:
        print(f"  - {table}")

    missing = [t for t in CORE_TABLES if t not in tables]
    if missing:
        print(f"WARNING: core tables missing: {', '.join(missing)}")


def read_owner_details(interactive):
    if not interactive:
        return {
            'email': os.getenv('OWNER_EMAIL', 'owner@example.com'),
            'password': os.getenv('OWNER_PASSWORD', ''),
            'first_name': os.getenv('OWNER_FIRST_NAME', 'Admin'),
            'last_name': os.getenv('OWNER_LAST_NAME', 'User'),
            'company_name': os.getenv('OWNER_COMPANY_NAME'),
        }

    details = {
        'email': input("Email [owner@example.com]: ").strip() or 'owner@example.com',
        'first_name': input("First name [Admin]: ").strip() or 'Admin',
        'last_name': input("Last name [User]: ").strip() or 'User',
        'company_name': input("Company name (optional): ").strip() or None,
        'password': getpass.getpass("Password (8+ chars, letters and digits): "),
    }
    return details


def create_owner(app, interactive=True):
    """
    Register a company owner with the same validation and provisioning as
    POST /auth/sign-up.

    Returns:
        The new or already existing User, None on failure
    """
    banner("STEP 3: Company owner")

    details = {k: v for k, v in read_owner_details(interactive).items() if v is not None}
    try:
        data = sign_up_schema.load(details)
    except ValidationError as err:
        for field, messages in err.messages.items():
            print(f"ERROR: {field}: {' '.join(messages)}")
        return None

    with app.app_context():
        existing = UserService.find_by_email(data['email'])
        if existing:
            print(f"✓ User {existing.email} already exists ({existing.id})")
            return existing

        try:
            user, _ = AuthService.sign_up(**data)
        except AppError as e:
            print(f"ERROR: Failed to create owner: {e.message}")
            return None

        print(f"✓ Owner {user.get_full_name()} <{user.email}> created ({user.id})")
        return user


def provision_user(app, email):
    """Create the company and settings of an existing user who has none."""
    banner(f"Provisioning a company for {email}")

    with app.app_context():
        user = UserService.find_by_email(email)
        if not user:
            print(f"ERROR: No user with email {email}")
            return False

        try:
            company = ProvisioningService.provision_owner(user.id)
        except AppError as e:
            print(f"ERROR: {e.message}")
            return False

    print(f"✓ Company {company.id} provisioned for {email}")
    return True


def drop_all(app):
    banner("WARNING: DROP ALL DATA")
    print("Every table, including the migration history, will be dropped.")

    if input(f"Type '{CONFIRMATION}' to confirm: ").strip() != CONFIRMATION:
        print("Aborted. No data was deleted.")
        return False

    with app.app_context():
        db.drop_all()
        with db.engine.begin() as conn:
            conn.execute(text("DROP TABLE IF EXISTS alembic_version"))

    print("✓ All tables dropped")
    return True


def main():
    args = parse_args()
    app = create_app(args.config)
    database_url = app.config['SQLALCHEMY_DATABASE_URI']

    banner("Adrevolution database initialization")
    print(f"Configuration: {args.config}")
    print(f"Database: {make_url(database_url).render_as_string(hide_password=True)}")

    if args.drop_all and not drop_all(app):
        sys.exit(1)

    ensure_database(database_url)
    run_migrations(app)

    ok = True
    if args.create_owner:
        ok = create_owner(app, interactive=not args.non_interactive) is not None and ok
    if args.provision_user:
        ok = provision_user(app, args.provision_user) and ok

    banner("INITIALIZATION COMPLETE" if ok else "INITIALIZATION FINISHED WITH ERRORS")
    print(f"Start the API with: python run.py (port {app.config['PORT']})")
    sys.exit(0 if ok else 1)


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\nInitialization cancelled")
        sys.exit(1)
