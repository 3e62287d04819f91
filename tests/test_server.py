import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from isekaishop.config import Config, DatabaseConfig, EndpointConfig, OAuth2Config, ServerConfig
from isekaishop.entities import Base, Item
from isekaishop.server import create_app, parse_body_limit

ORIGIN = "http://localhost:3000"


def _config(body_limit="10K", timeout=5, allow_origins=(ORIGIN,)):
    password = "password"
    return Config(
        database=DatabaseConfig(
            host="localhost", port=5432, user="user", password=password,
            dbname="shop", sslmode="disable", schema="public",
        ),
        server=ServerConfig(
            port=8080, allow_origins=list(allow_origins), body_limit=body_limit, timeout=timeout,
        ),
        oauth2=OAuth2Config(
            player_redirect_url="http://localhost/player",
            admin_redirect_url="http://localhost/admin",
            client_id="client",
            client_secret="secret",
            endpoints=EndpointConfig(
                auth_url="http://localhost/auth",
                token_url="http://localhost/token",
                device_auth_url="http://localhost/device",
            ),
            scopes=["email"],
            user_info_url="http://localhost/userinfo",
            revoke_url="http://localhost/revoke",
        ),
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine)
    with factory() as session, session.begin():
        session.add_all([
            Item(name="Sword", description="A sword.", picture="sword.jpg", price=100),
            Item(name="Shield", description="A shield.", picture="shield.jpg", price=50),
            Item(name="Potion", description="A potion.", picture="potion.jpg", price=30),
            Item(name="Relic", description="Old relic.", picture="relic.jpg", price=5,
                 is_archive=True),
        ])
    yield factory
    engine.dispose()


@pytest.fixture
def client(session_factory):
    return create_app(_config(), session_factory).test_client()


def test_parse_body_limit_units():
    assert parse_body_limit("512") == 512
    assert parse_body_limit("512B") == 512
    assert parse_body_limit("2M") == 2 * 1024 * 1024
    assert parse_body_limit("10K") == parse_body_limit("10KB")
    assert parse_body_limit("1g") == parse_body_limit("1024M")


@pytest.mark.parametrize("value", ["abc", "", "10X", "-5K"])
def test_parse_body_limit_rejects(value):
    with pytest.raises(ValueError):
        parse_body_limit(value)


def test_health_check(client):
    response = client.get("/v1/health")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "OK"


def test_listing_pages_unarchived_items(client):
    first = client.get("/v1/item-shop?page=1&size=2")
    assert first.status_code == 200
    body = first.get_json()
    assert len(body["items"]) == 2
    assert body["paginate"] == {"page": 1, "totalPage": 2}

    second = client.get("/v1/item-shop?page=2&size=2").get_json()
    assert len(second["items"]) == 1
    names = {item["name"] for item in body["items"] + second["items"]}
    assert names == {"Sword", "Shield", "Potion"}


def test_listing_filters_by_name_case_insensitively(client):
    body = client.get("/v1/item-shop?name=SW&page=1&size=5").get_json()
    assert [item["name"] for item in body["items"]] == ["Sword"]
    assert body["items"][0]["price"] == 100


def test_listing_invalid_filter_is_bad_request(client):
    response = client.get("/v1/item-shop?page=1&size=50")
    assert response.status_code == 400
    assert "Size" in response.get_json()["message"]


def test_unknown_route_is_json_error(client):
    response = client.get("/v1/nowhere")
    assert response.status_code == 404
    assert response.get_json() == {"message": "Not Found"}


def test_cors_allowed_origin(client):
    response = client.get("/v1/health", headers={"Origin": ORIGIN})
    assert response.headers["Access-Control-Allow-Origin"] == ORIGIN


def test_cors_disallowed_origin(client):
    response = client.get("/v1/health", headers={"Origin": "http://other.example.com"})
    assert "Access-Control-Allow-Origin" not in response.headers


def test_cors_preflight(client):
    response = client.options(
        "/v1/item-shop",
        headers={"Origin": ORIGIN, "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 204
    assert response.headers["Access-Control-Allow-Origin"] == ORIGIN
    methods = set(response.headers["Access-Control-Allow-Methods"].split(","))
    assert methods == {"GET", "POST", "PUT", "PATCH", "DELETE"}
    allowed_headers = set(response.headers["Access-Control-Allow-Headers"].split(","))
    assert allowed_headers == {"Origin", "Content-Type", "Accept"}


def test_wildcard_origin(session_factory):
    app = create_app(_config(allow_origins=("*",)), session_factory)
    response = app.test_client().get("/v1/health", headers={"Origin": ORIGIN})
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_body_limit_rejects_large_request(session_factory):
    app = create_app(_config(body_limit="1K"), session_factory)
    response = app.test_client().get("/v1/health", data=b"x" * 2048)
    assert response.status_code == 413
    small = app.test_client().get("/v1/health", data=b"x" * 10)
    assert small.status_code == 200


def test_timeout_returns_service_unavailable(session_factory):
    def slow_factory():
        time.sleep(2)
        return session_factory()

    app = create_app(_config(timeout=1), slow_factory)
    response = app.test_client().get("/v1/item-shop?page=1&size=5")
    assert response.status_code == 503
    assert response.get_data(as_text=True) == "Request Timeout"