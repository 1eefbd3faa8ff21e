"""Sample catalog for local development."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from storefront.domain.model.order import new_id
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

SAMPLE_CATALOG = [
    {
        "name": "Titan Whey Protein Isolate",
        "description": "Ultra-pure whey protein isolate with 25g of protein per serving.",
        "price": "49.99", "stock": 150, "category": "Protein", "featured": True,
    },
    {
        "name": "Titan Pre-Workout Blast",
        "description": "Pre-workout formula with caffeine, beta-alanine and citrulline malate.",
        "price": "39.99", "stock": 120, "category": "Pre-Workout", "featured": True,
    },
    {
        "name": "Titan Creatine Monohydrate",
        "description": "Pure micronized creatine monohydrate, 5g per serving.",
        "price": "29.99", "stock": 200, "category": "Creatine", "featured": True,
    },
    {
        "name": "Titan BCAA Recovery",
        "description": "2:1:1 BCAA formula with 7g per serving.",
        "price": "34.99", "stock": 100, "category": "BCAA", "featured": True,
    },
    {
        "name": "Titan Mass Gainer",
        "description": "50g protein and 250g carbs per serving.",
        "price": "59.99", "stock": 80, "category": "Gainers", "featured": False,
    },
    {
        "name": "Titan L-Glutamine",
        "description": "Micronized L-glutamine for recovery.",
        "price": "27.99", "stock": 150, "category": "Amino Acids", "featured": False,
    },
    {
        "name": "Titan Multivitamin",
        "description": "Daily multivitamin and mineral complex.",
        "price": "24.99", "stock": 200, "category": "Vitamins", "featured": False,
    },
]

_PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1593095948071-474c5cc2989d?w=800&q=80"


def seed_catalog(uow_factory: Callable[[], UnitOfWork]) -> int:
    """Insert sample products that are not in the catalog yet. Returns how many."""
    added = 0
    with uow_factory() as uow:
        for entry in SAMPLE_CATALOG:
            if uow.products.get_by_name(entry["name"]) is not None:
                continue
            uow.products.save(
                Product(
                    id=new_id(),
                    name=entry["name"],
                    description=entry["description"],
                    price=Money.of(entry["price"]),
                    stock=entry["stock"],
                    category=entry["category"],
                    image_url=_PLACEHOLDER_IMAGE,
                    featured=entry["featured"],
                )
            )
            added += 1
        uow.commit()
    logger.info("catalog_seeded", added=added)
    return added
