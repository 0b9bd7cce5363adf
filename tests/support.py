import itertools

from inventory_api.core.security import hash_password
from inventory_api.database import Base, build_session_factory, create_db_engine
from inventory_api.models.product import Product
from inventory_api.models.user import User

TEST_PASSWORD_ROUNDS = 1_000

_sku_counter = itertools.count(1)


def make_database(database_url: str = "sqlite://"):
    engine = create_db_engine(database_url)
    Base.metadata.create_all(bind=engine)
    return engine, build_session_factory(engine)


def add_user(db, *, name="Stock Keeper", email=None, role="staff", password="secret123"):
    user = User(
        name=name,
        email=email or f"user{next(_sku_counter)}@example.com",
        password_hash=hash_password(password, TEST_PASSWORD_ROUNDS),
        role=role,
    )
    db.add(user)
    db.commit()
    return user


def add_product(db, creator, **overrides):
    values = {
        "name": "Sample Product",
        "sku": f"SKU-{next(_sku_counter):04d}",
        "category": "Electronics",
        "price": 150.0,
        "cost": 100.0,
        "stock": 20,
        "min_stock": 10,
        "unit": "pcs",
        "is_active": True,
    }
    values.update(overrides)
    product = Product(created_by_id=creator.id, **values)
    db.add(product)
    db.commit()
    return product
