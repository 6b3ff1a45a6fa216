import pytest
from sqlalchemy import create_engine, text

from config import Config
from weighbridge import create_app
from weighbridge.database import Base, get_session
from weighbridge.models import Company, Driver, Order
from weighbridge.services.order_number_service import MaxScanAllocator
from weighbridge.services.schema_service import SchemaFlags


# Schema of deployments created before order_type and payment_terms existed
LEGACY_SCHEMA = [
    """
    CREATE TABLE companies (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name VARCHAR(255) NOT NULL UNIQUE,
        address TEXT,
        created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE drivers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name VARCHAR(255) NOT NULL UNIQUE,
        phone VARCHAR(50),
        last_plate VARCHAR(50),
        created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE orders (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        order_number VARCHAR(64) NOT NULL UNIQUE,
        customer_id INTEGER,
        supplier_id INTEGER,
        driver_id INTEGER,
        num_bags INTEGER,
        plate_num VARCHAR(50),
        product VARCHAR(50),
        first_weight_time DATETIME,
        first_weight_kg NUMERIC(12, 2),
        second_weight_time DATETIME,
        second_weight_kg NUMERIC(12, 2),
        net_weight_kg NUMERIC(12, 2),
        balance_id VARCHAR(64),
        customer_address TEXT,
        fees NUMERIC(12, 2),
        bill_date DATE,
        unit VARCHAR(20),
        price NUMERIC(12, 2),
        quantity NUMERIC(12, 3),
        total_price NUMERIC(14, 2),
        suggested_selling_price NUMERIC(12, 2),
        payment_method VARCHAR(20),
        signature VARCHAR(255),
        status VARCHAR(20) NOT NULL DEFAULT 'pending',
        created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE code_counters (
        prefix VARCHAR(16) PRIMARY KEY,
        last_value INTEGER NOT NULL DEFAULT 0
    )
    """,
]


def make_config(database_uri, **overrides):
    """Config subclass pointing at a test database."""
    attributes = {
        'TESTING': True,
        'ENV': 'testing',
        'SQLALCHEMY_DATABASE_URI': database_uri,
        'SQLALCHEMY_ECHO': False,
        'LOG_LEVEL': 'WARNING',
        'ORDER_NUMBER_STRATEGY': 'max_scan',
    }
    attributes.update(overrides)
    return type('TestConfig', (Config,), attributes)


def _truncate(session):
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    """Application on a SQLite database with the full schema."""
    database_uri = f"sqlite:///{tmp_path_factory.mktemp('current') / 'weighbridge.db'}"
    engine = create_engine(database_uri)
    Base.metadata.create_all(engine)
    engine.dispose()
    return create_app(make_config(database_uri))


@pytest.fixture(scope='session')
def legacy_app(tmp_path_factory):
    """Application on a database without orders.order_type / orders.payment_terms."""
    database_uri = f"sqlite:///{tmp_path_factory.mktemp('legacy') / 'weighbridge.db'}"
    engine = create_engine(database_uri)
    with engine.begin() as connection:
        for statement in LEGACY_SCHEMA:
            connection.execute(text(statement))
    engine.dispose()
    return create_app(make_config(database_uri))


@pytest.fixture(scope='function')
def session(app):
    """Database session inside an app context; tables are emptied afterwards."""
    with app.app_context():
        session = get_session()
        yield session
        _truncate(session)


@pytest.fixture(scope='function')
def legacy_session(legacy_app):
    with legacy_app.app_context():
        session = get_session()
        yield session
        _truncate(session)


@pytest.fixture(scope='function')
def client(app, session):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def legacy_client(legacy_app, legacy_session):
    return legacy_app.test_client()


@pytest.fixture
def flags():
    return SchemaFlags(has_payment_terms=True, has_order_type=True)


@pytest.fixture
def legacy_flags():
    return SchemaFlags(has_payment_terms=False, has_order_type=False)


@pytest.fixture
def allocator():
    return MaxScanAllocator(prefix='ORD', pad_width=4)


@pytest.fixture
def customer(session):
    company = Company(name='Acme Co', address='12 Mill Road')
    session.add(company)
    session.commit()
    return company


@pytest.fixture
def supplier(session):
    company = Company(name='Delta Farms', address='Route 5')
    session.add(company)
    session.commit()
    return company


@pytest.fixture
def driver(session):
    driver = Driver(name='Omar Haddad', phone='+20 100 000 0000', last_plate='ABC-123')
    session.add(driver)
    session.commit()
    return driver


@pytest.fixture
def add_order(session):
    """Insert orders directly through the ORM."""
    def _add_order(order_number, **fields):
        fields.setdefault('status', 'pending')
        order = Order(order_number=order_number, **fields)
        session.add(order)
        session.commit()
        return order.id
    return _add_order
