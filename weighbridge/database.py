"""Database configuration and initialization."""
from flask import current_app, has_app_context
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base

# Create SQLAlchemy base
Base = declarative_base()

# Engine and session of the most recently initialized app (scripts, CLI)
engine = None
db_session = None


def _engine_options(app) -> dict:
    """Pool options for the configured database (SQLite has no sized pool)."""
    options = {
        'echo': app.config.get('SQLALCHEMY_ECHO', False),
        'pool_pre_ping': True,  # Enable connection health checks
    }
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
        options['connect_args'] = {'check_same_thread': False}
    else:
        options['pool_size'] = app.config.get('DB_POOL_SIZE', 10)
        options['max_overflow'] = app.config.get('DB_MAX_OVERFLOW', 20)
    return options


def init_db(app):
    """Initialize database connection."""
    global engine, db_session

    app_engine = create_engine(app.config['SQLALCHEMY_DATABASE_URI'], **_engine_options(app))
    app_session = scoped_session(
        sessionmaker(autocommit=False, autoflush=False, bind=app_engine)
    )
    app.extensions['db_engine'] = app_engine
    app.extensions['db_session'] = app_session
    engine, db_session = app_engine, app_session

    # Register teardown
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Close database session and rollback on error."""
        if exception:
            app_session.rollback()
        app_session.remove()

    return app_engine


def create_all(bind=None):
    """Create every table registered on Base (fresh deployments and tests)."""
    import weighbridge.models  # noqa: F401  (registers the tables)
    Base.metadata.create_all(bind=bind or get_engine())


def get_engine():
    """Get database engine."""
    if has_app_context():
        return current_app.extensions['db_engine']
    return engine


def get_session():
    """Get database session."""
    if has_app_context():
        return current_app.extensions['db_session']
    return db_session
