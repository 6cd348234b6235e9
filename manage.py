#!/usr/bin/env python3
"""
Stock Ledger management CLI.

Usage:
    python manage.py migrate            Apply pending database migrations
    python manage.py migration-status   Show applied and pending migrations
    python manage.py verify             Run schema and balance integrity checks
    python manage.py serve              Start the API server
"""

import argparse
import asyncio
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def _db_path(args: argparse.Namespace) -> Path | None:
    return Path(args.db) if getattr(args, "db", None) else None


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations, with a backup unless --no-backup."""
    from src.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(
        initialize_database(_db_path(args), create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
        return

    for result in results:
        state = "OK" if result.success else "FAILED"
        print(f"  v{result.version}_{result.name:<30} {state:<7} {result.execution_time_ms}ms")
        if result.error:
            print(f"           {result.error}")

    if not all(r.success for r in results):
        sys.exit(1)


def cmd_migration_status(args: argparse.Namespace) -> None:
    """Print applied and pending migrations."""
    from src.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status(_db_path(args)))
    if not status["exists"]:
        print("Database does not exist yet.")
    else:
        print(f"Current version: {status['current_version'] or '-'}")
        print(f"Applied: {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending: {', '.join(status['pending_migrations']) or '-'}")


def cmd_verify(args: argparse.Namespace) -> None:
    """Run integrity checks; exit 1 when any check fails."""
    from src.infrastructure.storage.sqlite.migrations import verify_schema_integrity

    checks = asyncio.run(verify_schema_integrity(_db_path(args)))
    failed = False
    for check in checks:
        extra = {k: v for k, v in check.items() if k not in ("check", "status")}
        print(f"  {check['check']:<20} {check['status']:<5} {extra}")
        failed = failed or check["status"] != "PASS"

    if failed:
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    from src.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "src.api.main:app",
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        reload=args.reload,
        app_dir=str(ROOT_DIR),
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Stock Ledger management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db", help="Database file (default: from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # migration-status
    p_status = sub.add_parser("migration-status", help="Show migration status")
    p_status.add_argument("--db", help="Database file (default: from settings)")
    p_status.set_defaults(func=cmd_migration_status)

    # verify
    p_verify = sub.add_parser("verify", help="Run integrity checks")
    p_verify.add_argument("--db", help="Database file (default: from settings)")
    p_verify.set_defaults(func=cmd_verify)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
