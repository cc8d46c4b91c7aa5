# tests/connector/test_params.py
import logging
import pytest
from unittest.mock import patch
from ...connector import params as params_module
from ...connector.params import SqliteParams, default_connection_limit, DEFAULT_STATEMENT_CACHE_SIZE
from ...connector.exceptions import DatabaseUrlIsInvalid, InvalidConnectionArguments


class TestParsePath:
    """Tests for the path part of the connection string."""

    def test_strips_file_scheme(self):
        """Test that the file: prefix is not kept in file_path."""
        params = SqliteParams.parse("file:dev.db")
        assert params.file_path == "dev.db"

    def test_path_without_scheme(self):
        params = SqliteParams.parse("db/test.db")
        assert params.file_path == "db/test.db"

    @pytest.mark.parametrize("path", ["dev.db", "a/b/c.sqlite", "/tmp/x.db", "données.db"])
    def test_file_scheme_paths(self, path):
        assert SqliteParams.parse(f"file:{path}").file_path == path

    def test_query_block_not_part_of_path(self):
        params = SqliteParams.parse("file:dev.db?db_name=dev")
        assert params.file_path == "dev.db"

    def test_directory_is_rejected(self, tmp_path):
        """Test that a directory path fails with DatabaseUrlIsInvalid."""
        with pytest.raises(DatabaseUrlIsInvalid) as exc_info:
            SqliteParams.parse(f"file:{tmp_path}")
        assert exc_info.value.path == str(tmp_path)

    def test_directory_with_query_is_rejected(self, tmp_path):
        with pytest.raises(DatabaseUrlIsInvalid):
            SqliteParams.parse(f"{tmp_path}?connection_limit=2")

    def test_empty_path_is_rejected(self):
        with pytest.raises(DatabaseUrlIsInvalid):
            SqliteParams.parse("file:")

    def test_non_utf8_path_is_rejected(self):
        with pytest.raises(DatabaseUrlIsInvalid):
            SqliteParams.parse("file:bad\udcff.db")

    def test_missing_file_is_accepted(self, tmp_path):
        path = tmp_path / "does-not-exist.db"
        params = SqliteParams.parse(f"file:{path}")
        assert params.file_path == str(path)
        assert not path.exists()


class TestParseQuery:
    """Tests for the query-parameter block."""

    def test_defaults(self):
        params = SqliteParams.parse("file:dev.db")
        assert params.db_name is None
        assert params.connection_limit == default_connection_limit()
        assert params.statement_cache_size == DEFAULT_STATEMENT_CACHE_SIZE

    def test_default_connection_limit_uses_physical_cores(self):
        with patch.object(params_module, "physical_cpu_count", return_value=4):
            assert default_connection_limit() == 9

    def test_connection_limit(self):
        params = SqliteParams.parse("file:dev.db?connection_limit=7")
        assert params.connection_limit == 7

    @pytest.mark.parametrize("value", ["abc", "1.5", "-3", "0", "", " 4", "+4", "1_0"])
    def test_invalid_connection_limit(self, value):
        """Test that a non-integer connection_limit fails."""
        with pytest.raises(InvalidConnectionArguments):
            SqliteParams.parse(f"file:dev.db?connection_limit={value}")

    def test_db_name_is_verbatim(self):
        params = SqliteParams.parse("file:dev.db?db_name=My-Db")
        assert params.db_name == "My-Db"

    def test_all_recognized_keys(self):
        params = SqliteParams.parse(
            "file:dev.db?connection_limit=3&db_name=dev&statement_cache_size=0"
        )
        assert params == SqliteParams("dev.db", db_name="dev", connection_limit=3, statement_cache_size=0)

    def test_invalid_statement_cache_size(self):
        with pytest.raises(InvalidConnectionArguments):
            SqliteParams.parse("file:dev.db?statement_cache_size=lots")

    def test_unknown_keys_are_ignored(self):
        params = SqliteParams.parse("file:dev.db?socket_timeout=5&db_name=dev&schema=public")
        assert params.db_name == "dev"

    def test_unknown_keys_are_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=params_module.__name__):
            SqliteParams.parse("file:dev.db?schema=public")
        assert "Discarding connection string param: schema" in caplog.text

    def test_empty_segments_are_skipped(self):
        params = SqliteParams.parse("file:dev.db?&db_name=dev&")
        assert params.db_name == "dev"

    def test_segment_without_equals_fails(self):
        with pytest.raises(InvalidConnectionArguments):
            SqliteParams.parse("file:dev.db?db_name")


class TestSqliteParams:
    """Tests for SqliteParams as a value object."""

    def test_equality_and_hash(self):
        a = SqliteParams("dev.db", db_name="dev", connection_limit=3)
        b = SqliteParams("dev.db", db_name="dev", connection_limit=3)
        assert a == b
        assert hash(a) == hash(b)
        assert a != SqliteParams("other.db", db_name="dev", connection_limit=3)

    def test_is_immutable(self):
        params = SqliteParams("dev.db")
        with pytest.raises(AttributeError):
            params.file_path = "other.db"

    def test_constructor_validates(self, tmp_path):
        with pytest.raises(DatabaseUrlIsInvalid):
            SqliteParams(str(tmp_path))
        with pytest.raises(InvalidConnectionArguments):
            SqliteParams("dev.db", connection_limit=0)

    def test_repr(self):
        assert "file_path='dev.db'" in repr(SqliteParams("dev.db"))
