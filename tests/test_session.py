import pytest
from snowflake.connector.errors import DatabaseError, ProgrammingError

from sfmap.core.adapters.catalog import SnowflakeCatalogAdapter
from sfmap.core.adapters.session import SnowflakeSession
from sfmap.core.config import SnowflakeConfig
from sfmap.core.errors import QueryError, SnowflakeConnectionError

_CONFIG = SnowflakeConfig(
    account="acme",
    username="mapper",
    password="secret",
    warehouse="WH",
    role="SALES",
)


class _Cursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, sql, params=None):
        self.conn.statements.append(sql)
        if self.conn.fail_on and self.conn.fail_on in sql:
            raise ProgrammingError("SQL compilation error")

    def fetchall(self):
        return self.conn.results.pop(0) if self.conn.results else []

    def close(self):
        pass


class _Connection:
    def __init__(self, results=None, fail_on=None):
        self.statements: list[str] = []
        self.results = list(results or [])
        self.fail_on = fail_on
        self.closed = False

    def cursor(self, cursor_class=None):
        return _Cursor(self)

    def close(self):
        self.closed = True


class _Connector:
    def __init__(self, connection, failures: int = 0):
        self.connection = connection
        self.failures = failures
        self.kwargs: list[dict] = []

    def __call__(self, **kwargs):
        self.kwargs.append(kwargs)
        if self.failures:
            self.failures -= 1
            raise DatabaseError("Incorrect username or password was specified.")
        return self.connection


def test_connect_is_idempotent():
    connector = _Connector(_Connection())
    session = SnowflakeSession(_CONFIG, connect=connector)

    session.connect()
    session.connect()

    assert len(connector.kwargs) == 1
    assert connector.kwargs[0]["user"] == "mapper"
    assert connector.kwargs[0]["login_timeout"] == 30


def test_connect_failure_leaves_session_unset_for_retry():
    connector = _Connector(_Connection(), failures=1)
    session = SnowflakeSession(_CONFIG, connect=connector)

    with pytest.raises(SnowflakeConnectionError, match="Incorrect username"):
        session.connect()
    assert session.connected is False

    session.connect()
    assert session.connected is True


def test_execute_wraps_errors_with_intent():
    session = SnowflakeSession(_CONFIG, connect=_Connector(_Connection(fail_on="ROLE")))

    with pytest.raises(QueryError, match="Failed to set role SALES"):
        session.use_role("SALES")


def test_catalog_adapter_decodes_show_output():
    conn = _Connection(
        results=[
            [{"name": "SALES", "created_on": None, "owner": "SYSADMIN", "comment": ""}],
            [{"name": "COMPUTE_WH", "size": "X-Small", "state": "STARTED", "type": "STANDARD"}],
        ]
    )
    adapter = SnowflakeCatalogAdapter(SnowflakeSession(_CONFIG, connect=_Connector(conn)))

    dbs = adapter.list_databases()
    whs = adapter.list_warehouses()

    assert dbs[0].name == "SALES"
    assert dbs[0].created_on == ""
    assert whs[0].type == "STANDARD"
    assert conn.statements == ["SHOW DATABASES", "SHOW WAREHOUSES"]


def test_list_columns_orders_by_schema_table_ordinal():
    conn = _Connection()
    adapter = SnowflakeCatalogAdapter(SnowflakeSession(_CONFIG, connect=_Connector(conn)))

    adapter.list_columns("my-db")

    sql = conn.statements[0]
    assert 'FROM "my-db".information_schema.columns' in sql
    assert sql.rstrip().endswith("ORDER BY table_schema, table_name, ordinal_position")


def test_close_allows_reconnect():
    conn = _Connection()
    connector = _Connector(conn)
    with SnowflakeSession(_CONFIG, connect=connector) as session:
        session.connect()

    assert conn.closed is True
    assert session.connected is False


def test_list_columns_quotes_catalog_names_exactly():
    conn = _Connection(results=[[{"name": "demo_db", "created_on": None, "owner": "SYSADMIN"}]])
    adapter = SnowflakeCatalogAdapter(SnowflakeSession(_CONFIG, connect=_Connector(conn)))

    (db,) = adapter.list_databases()
    adapter.list_columns(db.name)

    assert 'FROM "demo_db".information_schema.columns' in conn.statements[1]


def test_use_warehouse_resolves_plain_names_like_snowflake():
    conn = _Connection()
    session = SnowflakeSession(_CONFIG, connect=_Connector(conn))

    session.use_warehouse("analytics_wh")
    session.use_role('"mixedCase"')

    assert conn.statements == ['USE WAREHOUSE "ANALYTICS_WH"', 'USE ROLE "mixedCase"']
