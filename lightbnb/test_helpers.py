"""Test data helpers shared by the unit test modules and their fixtures."""

# Use in-memory SQLite for test isolation
TEST_DATABASE_URL = "sqlite://"

def create_property_dict(owner_id, city, cost_per_night, title="Cozy Cabin", **overrides):
    data = {
        "owner_id": owner_id,
        "title": title,
        "description": "description",
        "thumbnail_photo_url": "https://example.com/thumb.jpg",
        "cover_photo_url": "https://example.com/cover.jpg",
        "cost_per_night": cost_per_night,
        "parking_spaces": 1,
        "number_of_bathrooms": 1,
        "number_of_bedrooms": 2,
        "country": "Canada",
        "street": "123 Main St",
        "city": city,
        "province": "BC",
        "post_code": "V5K 0A1",
    }
    data.update(overrides)
    return data
