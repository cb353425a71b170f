"""
Program and Regulation Lookup
=============================

Cross-references EPA programs and regulations by CFR part number.

``RegulationLookup`` is the interface the details and search operations
depend on. ``CatalogRegulationLookup`` serves it from a JSON catalog:

    {"programs": [{"id": "...", "name": "...",
                   "regulations": [{"id": "...", "name": "...", "cfr": "60"}]}]}

Version: 0.1.0
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from shared.logging import get_logger
from shared.models.regulation import Program, ProgramPage, RegulationRecord


logger = get_logger(__name__)


class RegulationLookup(Protocol):
    """Lookup of programs and regulations by CFR part."""

    async def get_programs_by_cfr(self, cfrs: list[int]) -> list[Program]:
        ...

    async def get_regulations_by_cfr(self, cfrs: list[int]) -> list[RegulationRecord]:
        ...

    async def search_programs(self, name: str, offset: int, limit: int) -> ProgramPage:
        ...


def _cfr_keys(cfrs: Iterable[int | str]) -> set[str]:
    return {str(cfr) for cfr in cfrs}


class CatalogRegulationLookup:
    """In-memory lookup over a catalog of programs."""

    def __init__(self, programs: list[Program] | None = None) -> None:
        self.programs = programs or []

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CatalogRegulationLookup":
        programs = [Program.model_validate(p) for p in data.get("programs", [])]
        return cls(programs)

    @classmethod
    def from_file(cls, path: str | Path) -> "CatalogRegulationLookup":
        """
        Load a catalog from a JSON file.

        Raises:
            FileNotFoundError: The catalog file does not exist
            ValueError: The file is not valid JSON or not a catalog
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        lookup = cls.from_dict(data)
        logger.info(
            "lookup_catalog_loaded",
            path=str(path),
            programs=len(lookup.programs),
        )
        return lookup

    async def get_programs_by_cfr(self, cfrs: list[int]) -> list[Program]:
        """Programs administering at least one regulation in ``cfrs``."""
        keys = _cfr_keys(cfrs)
        return [
            program
            for program in self.programs
            if any(reg.cfr in keys for reg in program.regulations)
        ]

    async def get_regulations_by_cfr(self, cfrs: list[int]) -> list[RegulationRecord]:
        """Regulations whose CFR part is in ``cfrs``, de-duplicated by id."""
        keys = _cfr_keys(cfrs)
        seen: set[str] = set()
        regulations: list[RegulationRecord] = []

        for program in self.programs:
            for reg in program.regulations:
                if reg.cfr in keys and reg.id not in seen:
                    seen.add(reg.id)
                    regulations.append(reg)

        return regulations

    async def search_programs(self, name: str, offset: int, limit: int) -> ProgramPage:
        """
        Case-insensitive substring search on program names.

        Args:
            name: Text to look for in program names
            offset: Number of matches to skip
            limit: Maximum number of matches to return
        """
        needle = name.lower()
        matches = [p for p in self.programs if needle in p.name.lower()]

        return ProgramPage(
            items=matches[offset:offset + limit],
            total=len(matches),
        )
