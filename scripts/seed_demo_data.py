"""
Load the demo organisation into the configured database.

Usage: python scripts/seed_demo_data.py
"""
from skillhub.core.config import settings
from skillhub.core.init_system import init_system_data, seed_demo_data
from skillhub.database import build_engine, build_session_factory, init_db


def seed():
    engine = build_engine(settings.database_url)
    init_db(engine)
    session_factory = build_session_factory(engine)
    db = session_factory()
    try:
        init_system_data(db)
        created = seed_demo_data(db)
        print(f"Loaded {created} evaluations into {settings.database_url}")
    finally:
        db.close()
        engine.dispose()

if __name__ == "__main__":
    seed()
