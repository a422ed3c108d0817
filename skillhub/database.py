from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()

def build_engine(database_url: str) -> Engine:
    """
    Create the process-wide connection pool.
    Supports both PostgreSQL and SQLite.
    """
    if database_url.startswith("postgresql"):
        return create_engine(database_url, pool_pre_ping=True)
    # SQLite configuration for local development/testing
    if ":memory:" in database_url:
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(
            database_url, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    return create_engine(
        database_url, connect_args={"check_same_thread": False}
    )

def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db(request: Request):
    """
    Session Provider: Provides a database session per request.
    The session factory is created once in the application lifespan and kept
    on app.state; transaction management is handled explicitly in the Service Layer.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

def init_db(engine: Engine):
    """
    Registers all domain models and initializes the database schema.
    This should be called during the application startup lifespan.
    """
    # Import all models to ensure they are registered with Base.metadata before create_all
    import skillhub.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
