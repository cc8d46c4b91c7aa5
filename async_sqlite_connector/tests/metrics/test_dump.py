# tests/metrics/test_dump.py
import pytest
from ...metrics.dump import MetricsDump, CSV_FIELDS

ENTRY = {
    "name": "sqlite.execute_raw",
    "sql": "INSERT INTO t VALUES (?)",
    "params": [1],
    "elapsed_ms": 0.5,
    "success": True,
    "error": None,
}


class TestMetricsDump:
    """Tests for MetricsDump."""

    def test_filetype_autodetect(self, tmp_path):
        assert MetricsDump(str(tmp_path / "m.json")).filetype == "json"
        assert MetricsDump(str(tmp_path / "m.jsonl")).filetype == "json"
        assert MetricsDump(str(tmp_path / "m.csv")).filetype == "csv"
        assert MetricsDump(str(tmp_path / "m.txt")).filetype == "txt"

    def test_explicit_filetype(self, tmp_path):
        assert MetricsDump(str(tmp_path / "m.log"), filetype="txt").filetype == "txt"

    def test_invalid_settings(self, tmp_path):
        with pytest.raises(ValueError):
            MetricsDump(str(tmp_path / "m.log"))
        with pytest.raises(ValueError):
            MetricsDump(str(tmp_path / "m.json"), mode="merge")
        with pytest.raises(ValueError):
            MetricsDump(str(tmp_path / "m.json"), filetype="xml")

    def test_creates_parent_directory(self, tmp_path):
        MetricsDump(str(tmp_path / "nested" / "m.json"))
        assert (tmp_path / "nested").is_dir()

    @pytest.mark.asyncio
    async def test_json_lines_append(self, tmp_path):
        dump = MetricsDump(str(tmp_path / "m.json"))
        await dump.write_many([ENTRY])
        await dump.write_many([ENTRY, ENTRY])
        assert await dump.read() == [ENTRY, ENTRY, ENTRY]

    @pytest.mark.asyncio
    async def test_overwrite(self, tmp_path):
        dump = MetricsDump(str(tmp_path / "m.json"), mode="overwrite")
        await dump.write_many([ENTRY, ENTRY])
        await dump.write_many([ENTRY])
        assert len(await dump.read()) == 1

    @pytest.mark.asyncio
    async def test_csv_header_written_once(self, tmp_path):
        path = tmp_path / "m.csv"
        dump = MetricsDump(str(path))
        await dump.write_many([ENTRY])
        await dump.write_many([ENTRY])

        lines = path.read_text().splitlines()
        assert lines[0] == ",".join(CSV_FIELDS)
        assert len(lines) == 3

        rows = await dump.read()
        assert rows[0]["name"] == "sqlite.execute_raw"
        assert rows[1]["elapsed_ms"] == "0.5"

    @pytest.mark.asyncio
    async def test_txt_lines(self, tmp_path):
        dump = MetricsDump(str(tmp_path / "m.txt"))
        await dump.write_many([ENTRY, dict(ENTRY, success=False, error="boom")])
        lines = await dump.read()
        assert lines[0].endswith("-> ok")
        assert lines[1].endswith("-> failed: boom")

    @pytest.mark.asyncio
    async def test_read_missing_file(self, tmp_path):
        assert await MetricsDump(str(tmp_path / "m.json")).read() == []
