from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from storefront.models.catalog_models import Product
from storefront.repositories.product_repositories import ProductRepository

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    dict(
        name="Amortisseur avant Peugeot 206/207",
        description=(
            "Amortisseur hydraulique haute qualité pour Peugeot 206 et 207. "
            "Garantit un confort de conduite optimal et une tenue de route parfaite."
        ),
        price=45000,
        images=["/amortisseurs1.jpg", "/amortisseurs2.jpg"],
        category="suspension",
        warranty="12 mois",
    ),
    dict(
        name="Filtre à huile universel",
        description=(
            "Filtre à huile de haute qualité compatible avec plusieurs modèles de véhicules. "
            "Assure une filtration optimale de l'huile moteur."
        ),
        price=25000,
        images=["/filtreaoil3.jpg"],
        category="moteur",
        warranty="6 mois",
    ),
    dict(
        name="Barre stabilisatrice avant",
        description=(
            "Barre stabilisatrice robuste pour améliorer la stabilité du véhicule en virage. "
            "Installation facile."
        ),
        price=15000,
        images=[
            "/Labiellettedebarrestabilisatrice3.jpg",
            "/Labiellettedebarrestabilisatrice1.jpg",
        ],
        category="suspension",
        warranty="12 mois",
    ),
]


def seed_catalog(db: Session) -> int:
    """Insert the sample products, only when the catalog is empty. Returns the number inserted."""
    repo = ProductRepository(db)
    if repo.count() > 0:
        logger.debug("[seed] catalog not empty, skipping")
        return 0

    repo.add_all(Product(**fields) for fields in SAMPLE_PRODUCTS)
    logger.info("[seed] sample products initialized", extra={"count": len(SAMPLE_PRODUCTS)})
    return len(SAMPLE_PRODUCTS)
