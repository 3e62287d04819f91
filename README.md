# isekaishop

A small HTTP service for an item shop. It defines PostgreSQL tables for
players, admins, items, inventories, coin transactions and purchase history,
and serves a paginated, filterable listing of the items on sale.

## Installation

```
pip install .
```

The database layer goes through SQLAlchemy with the `postgresql` dialect, so a
PostgreSQL driver that SQLAlchemy uses for that dialect (psycopg2 by default)
must be installed in the same environment.

## Configuration

Settings are read from `config/config.yaml`, relative to the working directory
(`isekaishop.config.get_config`), or from any path given to
`isekaishop.config.load_config(path, environ)`. Every section and every key is
required; a missing or empty value, a zero number, or a value of the wrong kind
makes loading fail with `ConfigError`. Keys in the file are matched without
regard to case.

Environment variables override file values. The variable name is the key path
joined with underscores and upper-cased, for example `DATABASE_HOST`,
`SERVER_PORT` or `SERVER_ALLOWORIGINS`. A list given through the environment is
split on whitespace.

```yaml
server:
  port: 8080
  allowOrigins:
    - "*"
  bodyLimit: "10M"
  timeout: 30          # seconds

oauth2:
  playerRedirectUrl: "http://localhost:8080/v1/oauth2/player/callback"
  adminRedirectUrl: "http://localhost:8080/v1/oauth2/admin/callback"
  clientId: "placeholder"
  clientSecret: "secret"
  endpoints:
    authUrl: "https://auth.example.com/authorize"
    tokenUrl: "https://auth.example.com/token"
    deviceAuthUrl: "https://auth.example.com/device"
  scopes:
    - "openid"
    - "email"
    - "profile"
  userInfoUrl: "https://auth.example.com/userinfo"
  revokeUrl: "https://auth.example.com/revoke"

database:
  host: "localhost"
  port: 5432
  user: "user"
  password: "password"
  dbname: "isekaishop"
  sslmode: "disable"
  schema: "public"
```

`bodyLimit` takes a number with an optional unit `B`, `K`, `M`, `G`, `T`, `P`
or `E` (optionally followed by `B`); units are powers of 1024.

## Preparing the database

Create the tables (this fails if they already exist):

```
isekaishop-migrate
```

Add a starter set of items (Sword, Shield, Potion, Bow and Arrow):

```
isekaishop-seed
```

Each command runs inside a single transaction that is rolled back on failure.
Both accept `--config PATH` to read a configuration file other than
`config/config.yaml`.

## Running the server

```
isekaishop-server
```

`--config PATH` selects another configuration file. The server listens on the
configured port and shuts down cleanly on SIGINT or SIGTERM. Requests pass
through CORS handling for the configured origins (methods GET, POST, PUT,
PATCH, DELETE; headers Origin, Content-Type, Accept), a request body size limit
(larger bodies get `413`) and a request timeout (slow requests get `503` with
the text `Request Timeout`).

### Endpoints

`GET /v1/health` answers `200` with the body `OK`.

`GET /v1/item-shop` lists items that are not archived.

| Query parameter | Rules                            |
|-----------------|----------------------------------|
| `page`          | required, at least 1             |
| `size`          | required, from 1 to 20           |
| `name`          | optional, at most 64 characters  |
| `description`   | optional, at most 128 characters |

`name` and `description` match case-insensitively anywhere in the field.

```
GET /v1/item-shop?page=1&size=2&name=sw
```

```json
{
  "items": [
    {
      "id": 1,
      "name": "Sword",
      "description": "A sword that can be used to fight enemies.",
      "picture": "https://images.example.com/items/sword.jpg",
      "price": 100
    }
  ],
  "paginate": {"page": 1, "totalPage": 1}
}
```

Invalid query parameters give `400`, database failures give `500`; both carry a
body of the form `{"message": "..."}`. Unknown paths and methods also answer
with such a body.

## Using it as a library

```python
from isekaishop.config import load_config
from isekaishop.database import get_database
from isekaishop.server import create_app, serve

conf = load_config("config/config.yaml", {})
db = get_database(conf.database)
app = create_app(conf, db.session)
serve(conf, app)
```

`serve` must be called from the main thread. The listing logic can be used
without HTTP:

```python
from isekaishop.models import ItemFilter
from isekaishop.repository import ItemShopRepository
from isekaishop.service import ItemShopService

service = ItemShopService(ItemShopRepository(db.session))
item_filter = ItemFilter.from_query({"page": "1", "size": "10"})
item_filter.validate()
print(service.listing(item_filter).to_dict())
```

Repository failures raise `ItemListingError` or `ItemCountingError` from
`isekaishop.exceptions`.

## What it does not do

The OAuth2 settings are loaded and validated but nothing uses them: there are
no login or callback endpoints. Players, admins, inventories, coins and
purchase history have tables, but the server offers no endpoints for them;
the item listing is the only shop endpoint.

## Running the tests

```
pip install ".[test]"
pytest
```