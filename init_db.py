#!/usr/bin/env python3
"""
Database Initialization Script
Creates the tables and seeds the default departments with their skill catalogues.

Usage:
    python init_db.py              # tables + default data
    python init_db.py --schema-only
"""
import sys
from pathlib import Path

# Add project directory to path
sys.path.insert(0, str(Path(__file__).parent))


def report_contents(db):
    from hr_console.models import Department, Skill

    print("\n🏢 Departments:")
    for dept in db.query(Department).order_by(Department.name).all():
        skills = db.query(Skill).filter(Skill.department_id == dept.id).count()
        print(f"   - {dept.name}: {skills} skills, {dept.employee_count} employees")


def main(argv):
    schema_only = "--schema-only" in argv

    print("=" * 60)
    print("HR Management Console - Database Setup")
    print("=" * 60)

    from sqlalchemy.exc import SQLAlchemyError
    from hr_console.config import settings
    from hr_console.database import init_db, SessionLocal
    from hr_console.models.init_data import init_default_data

    if not settings.secret_key:
        print("⚠️  SECRET_KEY is not set; sign in will fail until it is configured")

    print(f"\n🔨 Creating tables on {settings.database_url} ...")
    init_db()
    print("✅ Tables ready")

    if schema_only:
        print("⏭️  Skipping default departments (--schema-only)")
        return 0

    db = SessionLocal()
    try:
        init_default_data(db)
        report_contents(db)
    except SQLAlchemyError as e:
        print(f"❌ Seeding failed: {e}")
        db.rollback()
        return 1
    finally:
        db.close()

    print("\n" + "=" * 60)
    print("🎉 Setup completed!")
    print("   Start the console: uvicorn hr_console.main:app --reload --port 8000")
    print("   Then open http://localhost:8000 and create an account")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
