# metrics/dump.py
from __future__ import annotations

import os
import io
import csv
import json
import aiofiles
from typing import Any, Dict, Iterable, List

CSV_FIELDS = ("name", "sql", "params", "elapsed_ms", "success", "error")


class MetricsDump:
    """
    Writes recorded query metrics to a JSON-lines, CSV or TXT file asynchronously.
    """

    filetypes = {"json", "csv", "txt"}
    modes = {"overwrite", "append"}

    def __init__(
        self,
        path: str,
        *,
        mode: str = "append",
        filetype: str = "__autodetect__",
    ) -> None:
        self.path = self._normalize_path(path)
        self.mode = self._validate_mode(mode)
        self.filetype = self._resolve_filetype(filetype)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _normalize_path(path: str) -> str:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        return os.path.abspath(path)

    @staticmethod
    def _validate_mode(mode: str) -> str:
        if mode not in MetricsDump.modes:
            raise ValueError(f"Invalid mode: {mode}")
        return mode

    def _resolve_filetype(self, filetype: str) -> str:
        if filetype != "__autodetect__":
            if filetype not in self.filetypes:
                raise ValueError(f"Invalid filetype: {filetype}")
            return filetype

        for candidate in ("json", "jsonl", "csv", "txt"):
            if self.path.endswith(f".{candidate}"):
                return "json" if candidate == "jsonl" else candidate

        raise ValueError("Cannot autodetect filetype from path.")

    def _file_mode(self) -> str:
        return "w" if self.mode == "overwrite" else "a"

    def _needs_header(self) -> bool:
        if self.mode == "overwrite":
            return True
        return not os.path.exists(self.path) or os.path.getsize(self.path) == 0

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def write_many(self, entries: Iterable[Dict[str, Any]]) -> None:
        entries = list(entries)
        if self.filetype == "json":
            text = "".join(json.dumps(entry) + "\n" for entry in entries)
        elif self.filetype == "csv":
            text = self._render_csv(entries)
        else:
            text = "".join(f"{self._render_line(entry)}\n" for entry in entries)

        async with aiofiles.open(self.path, self._file_mode(), encoding="utf-8", newline="") as f:
            await f.write(text)

    async def read(self) -> List[Any]:
        """Read back what has been written. JSON yields dicts, CSV dict rows, TXT lines."""
        if not os.path.exists(self.path):
            return []
        async with aiofiles.open(self.path, "r", encoding="utf-8", newline="") as f:
            content = await f.read()

        if self.filetype == "json":
            return [json.loads(line) for line in content.splitlines() if line.strip()]
        if self.filetype == "csv":
            return list(csv.DictReader(io.StringIO(content)))
        return content.splitlines()

    def _render_csv(self, entries: List[Dict[str, Any]]) -> str:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, extrasaction="ignore")
        if self._needs_header():
            writer.writeheader()
        for entry in entries:
            writer.writerow({key: entry.get(key, "") for key in CSV_FIELDS})
        return buffer.getvalue()

    @staticmethod
    def _render_line(entry: Dict[str, Any]) -> str:
        outcome = "ok" if entry.get("success") else f"failed: {entry.get('error')}"
        return (f"{entry.get('name')} [{entry.get('elapsed_ms', 0):.3f} ms] "
                f"{entry.get('sql')} | {entry.get('params')} -> {outcome}")
