import argparse
import logging

from sqlalchemy import delete, select

from inventory_api.config import get_settings
from inventory_api.core.logging import setup_logging
from inventory_api.core.security import hash_password
from inventory_api.database import Base, build_session_factory, create_db_engine
from inventory_api.models.product import Product
from inventory_api.models.user import User

logger = logging.getLogger("seed")


def parse_args():
    parser = argparse.ArgumentParser(description="Seed an admin user and sample products.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    parser.add_argument("--admin-email", default="admin@example.com")
    parser.add_argument("--admin-password", default="admin123")
    return parser.parse_args()


def main():
    settings = get_settings()
    setup_logging(settings)
    args = parse_args()

    engine = create_db_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    SessionLocal = build_session_factory(engine)

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(Product))
            db.execute(delete(User))
            db.commit()

        has_product = db.execute(select(Product.id).limit(1)).first()
        if has_product:
            logger.info("Seed skipped: products already exist.")
            return

        admin = db.scalar(select(User).where(User.email == args.admin_email.lower()))
        if admin is None:
            admin = User(
                name="Administrator",
                email=args.admin_email,
                password_hash=hash_password(args.admin_password, settings.PASSWORD_PBKDF2_ROUNDS),
                role="admin",
            )
            db.add(admin)
            db.flush()

        products = [
            Product(
                name="Wireless Mouse",
                sku="ELEC-001",
                description="2.4GHz optical mouse",
                category="Electronics",
                price=150.0,
                cost=100.0,
                stock=42,
                min_stock=10,
                unit="pcs",
                supplier_name="Logi Distribution",
                supplier_contact="sales@logi.example.com",
                created_by_id=admin.id,
            ),
            Product(
                name="A4 Copy Paper",
                sku="STAT-010",
                description="80gsm, 500 sheets per ream",
                category="Stationery",
                price=6.5,
                cost=4.0,
                stock=8,
                min_stock=20,
                unit="box",
                created_by_id=admin.id,
            ),
            Product(
                name="Ground Coffee",
                sku="FOOD-204",
                category="Food & Beverage",
                price=12.0,
                cost=7.5,
                stock=15,
                min_stock=15,
                unit="kg",
                created_by_id=admin.id,
            ),
        ]
        db.add_all(products)
        db.commit()
        logger.info("Seed data created: %d products, admin %s", len(products), admin.email)
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
