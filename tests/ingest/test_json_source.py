from pathlib import Path

import pytest

from character_rankings.ingest.errors import DatasetLoadError
from character_rankings.ingest.json_source import JsonDocumentSource


class TestJsonDocumentSource:
    def test_source_metadata(self, tmp_path: Path) -> None:
        source = JsonDocumentSource(tmp_path / "doc.json")
        assert source.source_type == "json"
        assert source.source_detail == str(tmp_path / "doc.json")

    def test_fetch_object(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text('{"characters": [{"id": 1, "name": "キティ", "debut_year": 1974}]}', encoding="utf-8")
        assert JsonDocumentSource(path).fetch()["characters"][0]["name"] == "キティ"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetLoadError, match="file not found"):
            JsonDocumentSource(tmp_path / "missing.json").fetch()

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text("{not json")
        with pytest.raises(DatasetLoadError, match="invalid JSON"):
            JsonDocumentSource(path).fetch()

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(DatasetLoadError, match="not valid utf-8 text"):
            JsonDocumentSource(path).fetch()

    def test_directory_path(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetLoadError, match="cannot read file"):
            JsonDocumentSource(tmp_path).fetch()

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text("[1, 2]")
        with pytest.raises(DatasetLoadError, match="must be an object"):
            JsonDocumentSource(path).fetch()

    def test_error_carries_source(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetLoadError) as exc_info:
            JsonDocumentSource(tmp_path / "missing.json").fetch()
        assert exc_info.value.source == str(tmp_path / "missing.json")
        assert exc_info.value.detail == "file not found"
