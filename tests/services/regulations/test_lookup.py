"""
Tests for Program and Regulation Lookup
=======================================
"""

import json
from pathlib import Path
from typing import Any

import pytest

from services.regulations.lookup import CatalogRegulationLookup


class TestCatalogLoading:
    """Tests for building a catalog."""

    def test_from_dict(self, lookup: CatalogRegulationLookup) -> None:
        assert len(lookup.programs) == 4
        assert lookup.programs[0].name == "Clean Air Act Stationary Sources"

    def test_numeric_cfr_coerced(self, lookup: CatalogRegulationLookup) -> None:
        """Test numeric CFR parts in the catalog are stored as strings."""
        assert lookup.programs[0].regulations[1].cfr == "63"

    def test_from_file(self, tmp_path: Path, sample_catalog: dict[str, Any]) -> None:
        path = tmp_path / "programs.json"
        path.write_text(json.dumps(sample_catalog), encoding="utf-8")

        lookup = CatalogRegulationLookup.from_file(path)

        assert [p.id for p in lookup.programs] == [
            "caa-stationary",
            "air-toxics",
            "tri",
            "voluntary",
        ]

    def test_from_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            CatalogRegulationLookup.from_file(tmp_path / "missing.json")

    def test_bundled_catalog(self) -> None:
        """Test the catalog shipped with the service loads."""
        path = Path(__file__).parents[3] / "data" / "programs.json"

        lookup = CatalogRegulationLookup.from_file(path)

        assert lookup.programs


class TestCatalogQueries:
    """Tests for lookup queries."""

    @pytest.mark.asyncio
    async def test_programs_by_cfr(self, lookup: CatalogRegulationLookup) -> None:
        programs = await lookup.get_programs_by_cfr([63])

        assert [p.id for p in programs] == ["caa-stationary", "air-toxics"]

    @pytest.mark.asyncio
    async def test_programs_by_unknown_cfr(self, lookup: CatalogRegulationLookup) -> None:
        assert await lookup.get_programs_by_cfr([999]) == []

    @pytest.mark.asyncio
    async def test_programs_by_no_cfrs(self, lookup: CatalogRegulationLookup) -> None:
        assert await lookup.get_programs_by_cfr([]) == []

    @pytest.mark.asyncio
    async def test_regulations_by_cfr_deduplicated(self, lookup: CatalogRegulationLookup) -> None:
        """Test a regulation shared by programs is reported once."""
        regulations = await lookup.get_regulations_by_cfr([60, 63])

        assert [r.id for r in regulations] == ["nsps", "neshap-63"]

    @pytest.mark.asyncio
    async def test_search_programs_case_insensitive(self, lookup: CatalogRegulationLookup) -> None:
        page = await lookup.search_programs("toxic", 0, 10)

        assert page.total == 2
        assert [p.id for p in page.items] == ["air-toxics", "tri"]

    @pytest.mark.asyncio
    async def test_search_programs_window(self, lookup: CatalogRegulationLookup) -> None:
        """Test offset and limit slice matches but total counts all of them."""
        page = await lookup.search_programs("a", 1, 2)

        assert page.total == 4
        assert [p.id for p in page.items] == ["air-toxics", "tri"]

    @pytest.mark.asyncio
    async def test_search_programs_no_match(self, lookup: CatalogRegulationLookup) -> None:
        page = await lookup.search_programs("water", 0, 10)

        assert page.total == 0
        assert page.items == []
