"""
Admin panel initialisation script.

Run once after provisioning the database:
    python init_admin.py
    python init_admin.py --fix-permissions            # reset every admin's matrix
    python init_admin.py --fix-permissions superadmin # reset one admin's matrix

Creates (when missing):
  - all tables
  - the super admin (SUPER_ADMIN_USERNAME / SUPER_ADMIN_EMAIL / ADMIN_DEFAULT_PASSWORD)
  - a moderator account
  - the default system settings
"""
import argparse
import sys

from sqlalchemy import func

from admin_panel.bootstrap import ensure_admin, ensure_default_settings, fix_permissions
from admin_panel.config import settings
from admin_panel.database import Database
from admin_panel.models.admin import Admin
from admin_panel.models.system_setting import SystemSetting
from admin_panel.utils.permissions import Role

MODERATOR_USERNAME = "moderator"
MODERATOR_EMAIL = "moderator@telegram.com"
MODERATOR_PASSWORD = "moderator123456"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Initialise the admin panel database")
    parser.add_argument(
        "--fix-permissions",
        nargs="?",
        const="",
        metavar="USERNAME",
        help="Reset permission matrices to the role defaults (one admin, or all when no name is given)",
    )
    return parser.parse_args(argv)


def print_summary(session):
    admin_count = session.query(func.count(Admin.id)).scalar()
    super_admin_count = (
        session.query(func.count(Admin.id)).filter(Admin.role == Role.SUPERADMIN.value).scalar()
    )
    settings_count = session.query(func.count(SystemSetting.id)).scalar()

    print("\n📋 Initialization Summary")
    print("=" * 40)
    print(f"  Total admins:     {admin_count}")
    print(f"  Super admins:     {super_admin_count}")
    print(f"  System settings:  {settings_count}")
    print("=" * 40)
    print("\n⚠️  Security reminder:")
    print("  1. Change default passwords immediately")
    print("  2. Enable 2FA for all admin accounts")
    print("  3. Review and adjust permissions as needed")


def main(argv=None):
    args = parse_args(argv)
    database = Database.from_settings(settings)

    try:
        if args.fix_permissions is not None:
            with database.session_scope() as session:
                admins = fix_permissions(session, args.fix_permissions or None)
                if not admins:
                    print(f"  ❌ Admin not found: {args.fix_permissions}")
                    return 1
                for admin in admins:
                    print(f"  ✓ Permissions reset for {admin.username} ({admin.role})")
            return 0

        print("\n🚀 Initializing admin panel...\n")
        database.create_all()
        print("  ✓ Tables ready")

        with database.session_scope() as session:
            super_admin, created = ensure_admin(
                session,
                settings.SUPER_ADMIN_USERNAME,
                settings.SUPER_ADMIN_EMAIL,
                settings.ADMIN_DEFAULT_PASSWORD,
                Role.SUPERADMIN,
            )
            if created:
                print(f"  ✓ Super admin created: {super_admin.username} <{super_admin.email}>")
                print(f"    Password: {settings.ADMIN_DEFAULT_PASSWORD}")
            else:
                print(f"  ℹ️  Super admin already exists: {super_admin.username}")

            moderator, created = ensure_admin(
                session, MODERATOR_USERNAME, MODERATOR_EMAIL, MODERATOR_PASSWORD, Role.MODERATOR
            )
            if created:
                print(f"  ✓ Moderator created: {moderator.username} <{moderator.email}>")
                print(f"    Password: {MODERATOR_PASSWORD}")
            else:
                print(f"  ℹ️  Moderator already exists: {moderator.username}")

            for key in ensure_default_settings(session):
                print(f"  ✓ Created setting: {key}")

            print_summary(session)
    finally:
        database.dispose()

    print(f"\n✅ Admin panel is ready: http://localhost:{settings.PORT}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
