"""
Tests for the business registry endpoints.
"""

from booking_app import businesses
from booking_app.errors import AlreadyOwned
from booking_app.models import User
from booking_app.schemas import BusinessCreate


class TestCreateBusiness:

    def test_create(self, owner):
        response = owner.post(
            "/business",
            json={
                "name": "  Otto's Cuts ",
                "description": "Fades and trims",
                "operating_hours": "9:00 - 17:00",
                "category": "barber",
            },
        )

        assert response.status_code == 201
        business = response.json()["business"]
        assert business["name"] == "Otto's Cuts"
        assert business["owner_id"] == owner.user["id"]
        assert business["operating_hours"] == "9:00 - 17:00"
        assert business["category"] == "barber"

    def test_category_defaults_to_other(self, owner):
        response = owner.post("/business", json={"name": "Shop", "operating_hours": "10:00-18:00"})
        assert response.json()["business"]["category"] == "other"

    def test_unknown_category_rejected(self, owner):
        response = owner.post(
            "/business", json={"name": "Shop", "operating_hours": "10:00-18:00", "category": "spa"}
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "category"

    def test_second_business_rejected(self, owner, business):
        response = owner.post("/business", json={"name": "Another", "operating_hours": "10:00-18:00"})

        assert response.status_code == 409
        assert response.json()["message"] == "User already owns a business"
        assert len(owner.get("/business").json()["businesses"]) == 1

    def test_customers_cannot_create(self, customer):
        response = customer.post("/business", json={"name": "Shop", "operating_hours": "10:00-18:00"})
        assert response.status_code == 403

    def test_requires_session(self, client):
        response = client.post("/business", json={"name": "Shop", "operating_hours": "10:00-18:00"})
        assert response.status_code == 401

    def test_unique_owner_holds_without_the_read_check(self, owner, business, session, monkeypatch):
        # simulate the race: the prior lookup misses, the constraint must still hold
        monkeypatch.setattr(businesses, "get_owned", lambda session, owner_id: None)
        db_owner = session.get(User, owner.user["id"])

        try:
            businesses.create_business(
                session, db_owner, BusinessCreate(name="Twin", operating_hours="09:00-10:00")
            )
        except AlreadyOwned:
            pass
        else:
            raise AssertionError("second business was created")

        monkeypatch.undo()
        assert len(businesses.list_all(session)) == 1


class TestReadBusiness:

    def test_mine_without_business(self, owner):
        response = owner.get("/business/mine")
        assert response.status_code == 200
        assert response.json() == {"success": True, "business": None}

    def test_mine(self, owner, business):
        assert owner.get("/business/mine").json()["business"]["id"] == business["id"]

    def test_get_business(self, business, session):
        found = businesses.get_business(session, business["id"])
        assert found.name == "Otto's Cuts"
        assert businesses.get_business(session, 999) is None

    def test_list_all_projection(self, customer, business):
        response = customer.get("/business")

        assert response.status_code == 200
        listed = response.json()["businesses"]
        assert listed == [{
            "id": business["id"],
            "name": "Otto's Cuts",
            "description": None,
            "category": "barber",
            "operating_hours": "09:00-17:00",
            "owner_id": business["owner_id"],
        }]

    def test_queue_without_business(self, customer):
        response = customer.get("/business/appointments")
        assert response.status_code == 404
        assert response.json()["message"] == "Business not found"
