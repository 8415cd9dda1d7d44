import os
import sys
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

_TMP_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/test.db"
os.environ["SEED_SAMPLE_DATA"] = "0"
os.environ["TESTING"] = "1"

import pytest
from storefront.core.database import Base, engine, SessionLocal
from storefront.models.catalog_models import Product
from storefront.models import order_models  # noqa: F401


@pytest.fixture(autouse=True)
def setup_db():
	Base.metadata.create_all(bind=engine)
	yield
	Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
	session = SessionLocal()
	try:
		yield session
	finally:
		session.close()


@pytest.fixture
def make_product(db):
	def _make(name="A", price=100, category="x", description="", images=None, warranty="12 mois"):
		product = Product(
			name=name,
			description=description,
			price=price,
			category=category,
			images=images or [],
			warranty=warranty,
		)
		db.add(product)
		db.commit()
		db.refresh(product)
		return product
	return _make
