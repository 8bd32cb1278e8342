from fastapi.testclient import TestClient

from api import create_app
from core.exit_policy import RunCounter, RuntimeState


def test_health(registry) -> None:
    app = create_app(registry=registry, state=RuntimeState())
    client = TestClient(app)

    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["modules"] == 3


def test_modules(registry) -> None:
    client = TestClient(create_app(registry=registry, state=RuntimeState()))

    response = client.get("/modules")
    assert response.status_code == 200
    assert response.json() == {"foo": "foo --run", "bar": "bar build", "baz": "baz deploy"}


def test_config_from_page_url(registry) -> None:
    client = TestClient(create_app(registry=registry, state=RuntimeState()))

    response = client.get("/config?module=foo&speed-factor=abc")
    assert response.status_code == 200
    data = response.json()

    assert data["modules"] == ["foo"]
    assert data["speed_factor"] == 1.0
    assert data["instant_print_lines"] == 0


def test_config_defaults_and_drops_unknown(registry) -> None:
    client = TestClient(create_app(registry=registry, state=RuntimeState()))

    data = client.get("/config?module=nope&instant-print-lines=5&speed-factor=2").json()

    assert data["modules"] == ["foo", "bar", "baz"]
    assert data["speed_factor"] == 2.0
    assert data["instant_print_lines"] == 5


def test_runs_and_should_exit(registry) -> None:
    state = RuntimeState(counter=RunCounter(start=41))
    client = TestClient(create_app(registry=registry, state=state))

    response = client.post("/runs")
    assert response.status_code == 200
    assert response.json() == {"modules_ran": 42}

    # Limits are not part of the page configuration, so this stays False.
    data = client.get("/should-exit?exit-after-modules=1").json()
    assert data == {"should_exit": False, "modules_ran": 42}
