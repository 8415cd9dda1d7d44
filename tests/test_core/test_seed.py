from storefront.core.seed import SAMPLE_PRODUCTS, seed_catalog
from storefront.repositories.product_repositories import ProductRepository


def test_seed_fills_empty_catalog(db):
    assert seed_catalog(db) == len(SAMPLE_PRODUCTS)

    products = ProductRepository(db).list()
    assert [p.name for p in products] == [p["name"] for p in SAMPLE_PRODUCTS]
    assert products[0].images == ["/amortisseurs1.jpg", "/amortisseurs2.jpg"]


def test_seed_runs_only_once(db):
    seed_catalog(db)
    assert seed_catalog(db) == 0
    assert ProductRepository(db).count() == len(SAMPLE_PRODUCTS)


def test_seed_skips_non_empty_catalog(db, make_product):
    make_product("Existing", 10)
    assert seed_catalog(db) == 0
    assert ProductRepository(db).count() == 1
