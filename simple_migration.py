import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy import inspect
from app.database import engine
from app.models import Base

REQUIRED_TABLES = ("users", "mood_entries", "crisis_alerts")

def run_migration():
    """Create the users, mood_entries and crisis_alerts tables"""

    print("🔄 Setting up database for mood tracking and crisis alerts...")

    try:
        Base.metadata.create_all(bind=engine)
        print("✅ Database tables created successfully")

        existing = set(inspect(engine).get_table_names())
        for table in REQUIRED_TABLES:
            marker = "✅" if table in existing else "❌"
            print(f"{marker} {table}")

        missing = [t for t in REQUIRED_TABLES if t not in existing]
        if missing:
            print(f"❌ Missing tables after migration: {', '.join(missing)}")
            return False

        print("🎉 Migration completed")
        return True

    except Exception as e:
        print(f"❌ Migration failed: {str(e)}")
        return False

if __name__ == "__main__":
    ok = run_migration()
    sys.exit(0 if ok else 1)
