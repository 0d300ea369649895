import pytest
from fastapi.testclient import TestClient
from food_delivery.core.config import Settings
from food_delivery.core.database import Database
from food_delivery.core.errors import UpstreamFailure
from food_delivery.main import create_app
from food_delivery.models.food import FoodItem
from food_delivery.models.user import User
from food_delivery.services.payment import PaymentGateway

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

ADDRESS = {
    "firstName": "John",
    "lastName": "Jacob",
    "email": "john@mail.com",
    "street": "6 Jane Street",
    "city": "Ahmedabad",
    "state": "Gujarat",
    "zipcode": "380008",
    "country": "India",
    "phone": "8938339267",
}

class FakeGateway(PaymentGateway):
    def __init__(self):
        self.calls = []
        self.fail = False

    def create_checkout_session(self, order_id, line_items, amount, success_url, cancel_url):
        if self.fail:
            raise UpstreamFailure("Payment provider error")
        self.calls.append({
            "order_id": order_id,
            "line_items": line_items,
            "amount": amount,
            "success_url": success_url,
            "cancel_url": cancel_url,
        })
        return f"https://checkout.test/session/{order_id}"

@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        SECRET_KEY="test-secret",
        FRONTEND_URL="http://frontend.test",
        DELIVERY_FEE=2.0,
        DB_CONNECT_RETRIES=1,
        DB_CONNECT_WAIT_SECONDS=0,
        LOG_LEVEL="DEBUG",
    )

@pytest.fixture
def gateway():
    return FakeGateway()

@pytest.fixture
def app(settings, gateway):
    return create_app(settings, gateway=gateway)

@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def api(settings):
    return settings.API_PREFIX

@pytest.fixture
def auth_headers(client, api):
    response = client.post(f"{api}/user/register", json={
        "name": "Alice",
        "email": "alice@mail.com",
        "password": "correct-horse",
    })
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}

@pytest.fixture
def add_food(client, api):
    def _add(name="Greek Salad", price=12.0, category="Salad"):
        response = client.post(
            f"{api}/food/add",
            data={"name": name, "description": "Fresh", "price": str(price), "category": category},
            files={"image": ("salad.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 200
        items = client.get(f"{api}/food/list").json()["data"]
        return next(item for item in items if item["name"] == name)
    return _add

# Service-level fixtures, without the HTTP layer

@pytest.fixture
def database(settings):
    db = Database(settings.DATABASE_URL, retries=1, wait_seconds=0)
    db.connect()
    yield db
    db.close()

@pytest.fixture
def session(database):
    db = database.session()
    yield db
    db.close()

@pytest.fixture
def user(session):
    user = User(name="Bob", email="bob@mail.com", hashed_password="x")
    session.add(user)
    session.commit()
    return user

@pytest.fixture
def foods(session):
    items = [
        FoodItem(name="Lasagna Rolls", description="", price=14.0, category="Rolls", image="a.png"),
        FoodItem(name="Veg Salad", description="", price=18.5, category="Salad", image="b.png"),
    ]
    session.add_all(items)
    session.commit()
    return items
