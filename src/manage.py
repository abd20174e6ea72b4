"""Storefront management CLI.

Usage:
    python src/manage.py setup-db             # Create all tables
    python src/manage.py drop-db              # Drop all tables
    python src/manage.py create-super-admin --name "Root" --email root@example.com
"""

import argparse
import getpass
import sys


def _initialized_domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def create_super_admin(name, email, password):
    """Register the first super admin; the HTTP API cannot create one."""
    from protean.exceptions import ValidationError

    from storefront.user.registration import RegisterUser
    from storefront.user.user import Role

    domain = _initialized_domain()
    with domain.domain_context():
        try:
            user_id = domain.process(
                RegisterUser(name=name, email=email, password=password, role=Role.SUPER_ADMIN.value),
                asynchronous=False,
            )
        except ValidationError as exc:
            print(f"Could not create super admin: {exc.messages}", file=sys.stderr)
            sys.exit(1)
    print(f"Super admin created: {user_id}")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-super-admin", help="Create a super admin account")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-super-admin":
        password = args.password or getpass.getpass("Password: ")
        create_super_admin(args.name, args.email, password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
