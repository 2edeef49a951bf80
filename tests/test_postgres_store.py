"""
PostgreSQL Store Tests

psycopg2.connect is patched; no database is needed.
"""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from codematch.storage.base import StoreUnavailableError
from codematch.storage.postgres import PostgresMatchStore


def failing_bootstrap_conn():
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.execute.side_effect = psycopg2.OperationalError("permission denied for schema public")
    return conn


class TestSchemaBootstrap:

    def test_bootstrap_failure_is_store_unavailable(self):
        conn = failing_bootstrap_conn()
        store = PostgresMatchStore("postgresql://example/codematch")

        with patch("codematch.storage.postgres.psycopg2.connect", return_value=conn):
            with pytest.raises(StoreUnavailableError):
                store.get_profile("alice")

        conn.close.assert_called_once()

    def test_ping_reports_false(self):
        conn = failing_bootstrap_conn()
        store = PostgresMatchStore("postgresql://example/codematch")

        with patch("codematch.storage.postgres.psycopg2.connect", return_value=conn):
            assert store.ping() is False

    def test_connect_failure(self):
        store = PostgresMatchStore("postgresql://example/codematch")

        with patch(
            "codematch.storage.postgres.psycopg2.connect",
            side_effect=psycopg2.OperationalError("could not connect"),
        ):
            assert store.ping() is False
