import pytest
from canteen.api.app import create_app
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    return TestClient(create_app())


@pytest.fixture()
def customer():
    """Headers of the demo customer (user "1")."""
    return {"Authorization": "Bearer customer-token"}


@pytest.fixture()
def staff():
    """Headers of the demo staff member (user "2")."""
    return {"Authorization": "Bearer staff-token"}
