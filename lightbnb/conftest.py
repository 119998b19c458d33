import pytest
from datetime import date
from fastapi.testclient import TestClient

import lightbnb.models_sqlalchemy as models
from lightbnb.api_endpoints import app, get_db
from lightbnb.database import Database
from lightbnb.fixtures import load_fixture
from lightbnb.test_helpers import TEST_DATABASE_URL, create_property_dict

# ---------- TEST FIXTURES ----------

def seed(db):
    """
    Users 1-3 from users.json, then:

    property  owner  city                cents  reviews (avg)
    1         1      Vancouver           10000  5, 3 (4.0)
    2         1      North Vancouver      5000  2, 4 (3.0)
    3         2      Calgary             15000  5    (5.0)
    4         2      vancouver island    20000  4    (4.0)
    5         3      Vancouver            3000  none
    """
    db.seed_users(load_fixture("users"))
    with db.transaction() as session:
        session.add_all([
            models.Property(**create_property_dict(1, "Vancouver", 10000, "Speed lamp")),
            models.Property(**create_property_dict(1, "North Vancouver", 5000, "Blank corner")),
            models.Property(**create_property_dict(2, "Calgary", 15000, "Habit mix")),
            models.Property(**create_property_dict(2, "vancouver island", 20000, "Headed know")),
            models.Property(**create_property_dict(3, "Vancouver", 3000, "Unreviewed")),
        ])
        session.flush()
        session.add_all([
            models.Reservation(id=1, guest_id=3, property_id=1, start_date=date(2024, 3, 1), end_date=date(2024, 3, 5)),
            models.Reservation(id=2, guest_id=3, property_id=3, start_date=date(2024, 1, 10), end_date=date(2024, 1, 12)),
            models.Reservation(id=3, guest_id=3, property_id=5, start_date=date(2024, 2, 1), end_date=date(2024, 2, 3)),
            models.Reservation(id=4, guest_id=2, property_id=2, start_date=date(2024, 4, 1), end_date=date(2024, 4, 8)),
            models.Reservation(id=5, guest_id=3, property_id=2, start_date=date(2024, 5, 1), end_date=date(2024, 5, 2)),
            models.Reservation(id=6, guest_id=1, property_id=4, start_date=date(2024, 6, 1), end_date=date(2024, 6, 4)),
        ])
        session.flush()
        session.add_all([
            models.PropertyReview(guest_id=3, property_id=1, reservation_id=1, rating=5),
            models.PropertyReview(guest_id=3, property_id=1, reservation_id=1, rating=3),
            models.PropertyReview(guest_id=2, property_id=2, reservation_id=4, rating=2),
            models.PropertyReview(guest_id=3, property_id=2, reservation_id=5, rating=4),
            models.PropertyReview(guest_id=3, property_id=3, reservation_id=2, rating=5),
            models.PropertyReview(guest_id=1, property_id=4, reservation_id=6, rating=4),
        ])

@pytest.fixture(scope="function")
def empty_db():
    """An opened in-memory database with the schema but no rows."""
    db = Database(TEST_DATABASE_URL)
    db.open()
    models.Base.metadata.create_all(bind=db.engine)
    yield db
    db.close()

@pytest.fixture(scope="function")
def db(empty_db):
    seed(empty_db)
    return empty_db

@pytest.fixture(scope="function")
def client(db):
    """Override get_db dependency for FastAPI TestClient."""

    def override_get_db():
        return db

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
