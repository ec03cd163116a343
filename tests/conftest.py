import pytest
from swatches import create_app
from swatches.cli import seed_demo_catalog
from swatches.extensions import db as _db
from swatches.models import Product


@pytest.fixture(scope="session")
def app():
    """Create application for testing."""
    app = create_app("testing")
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    """Per-test database with a fresh schema."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def catalog(db):
    """Configurable tee with color (Red=10, Blue=11) and size (S=20, M=21, default 21)."""
    parent = seed_demo_catalog()
    return {
        "parent": parent,
        "red_m": Product.query.filter_by(sku="TEE-RED-M").one(),
        "blue_s": Product.query.filter_by(sku="TEE-BLUE-S").one(),
    }
