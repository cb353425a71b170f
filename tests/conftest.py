"""
Test Configuration
==================

Pytest fixtures for regulations service tests.
"""

import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["EPA_API_KEY"] = "test-key"
os.environ["LOOKUP_CATALOG_PATH"] = "tests/does-not-exist.json"

from services.regulations.client import EPAClient  # noqa: E402
from services.regulations.lookup import CatalogRegulationLookup  # noqa: E402
from shared.config import EPASettings  # noqa: E402


API_BASE_URL = "https://api.example.gov/regulations/v3"
FACILITY_URL = "https://frs.example.gov/enviro/frs_rest_services.get_facilities"
TEXT_URL = "https://api.example.gov/regulations/v3/download?documentId=EPA-HQ-OAR-2010-0682-0001&contentType=html"

NARRATIVE_TEXT = (
    "[Federal Register Volume 89]\n\n"
    "AGENCY: Environmental Protection Agency (EPA).\n\n"
    "SUMMARY: This action proposes amendments to the new source\n"
    "performance standards.\n\n"
    "DATES: Comments must be received on or before March 1, 2024.\n\n"
    "ADDRESSES : Submit your comments, identified by Docket ID No.\n"
    "EPA-HQ-OAR-2010-0682, to https://www.regulations.gov.\n\n"
    "FOR FURTHER INFORMATION CONTACT: Jane Doe, Sector Policies and\n"
    "Programs Division, (919) 541-0000.\n\n"
    "SUPPLEMENTARY INFORMATION: Background of the rule.\n\n"
    "Organization of this document.\n\n"
    "[[Page 1234]]\n"
)


@pytest.fixture
def epa_settings() -> EPASettings:
    """Upstream settings pointing at example hosts."""
    return EPASettings(
        api_base_url=API_BASE_URL,
        api_key="test-key",
        facility_url=FACILITY_URL,
        max_concurrency=4,
    )


@pytest.fixture
def make_epa_client(
    epa_settings: EPASettings,
) -> Callable[[Callable[[httpx.Request], httpx.Response]], EPAClient]:
    """Build an EPAClient whose transport is answered by ``handler``."""

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> EPAClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return EPAClient(epa_settings, http_client=http_client)

    return build


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Document metadata as returned by document.json."""
    return {
        "documentId": "EPA-HQ-OAR-2010-0682-0001",
        "title": "Standards of Performance for New Stationary Sources",
        "documentType": "Proposed Rule",
        "cfrPart": "40 CFR 60, 63",
        "fileFormats": [
            "https://api.example.gov/regulations/v3/download?documentId=EPA-HQ-OAR-2010-0682-0001&contentType=pdf",
            TEXT_URL,
        ],
    }


@pytest.fixture
def sample_catalog() -> dict[str, Any]:
    """A small program catalog."""
    return {
        "programs": [
            {
                "id": "caa-stationary",
                "name": "Clean Air Act Stationary Sources",
                "regulations": [
                    {"id": "nsps", "name": "New Source Performance Standards", "cfr": "60"},
                    {"id": "neshap-63", "name": "NESHAP for Source Categories", "cfr": 63},
                ],
            },
            {
                "id": "air-toxics",
                "name": "Air Toxics",
                "regulations": [
                    {"id": "neshap-63", "name": "NESHAP for Source Categories", "cfr": "63"},
                    {"id": "neshap-61", "name": "NESHAP", "cfr": "61"},
                ],
            },
            {
                "id": "tri",
                "name": "Toxics Release Inventory",
                "regulations": [
                    {"id": "part-372", "name": "Toxic Chemical Release Reporting", "cfr": "372"},
                ],
            },
            {
                "id": "voluntary",
                "name": "Voluntary Air Partnerships",
                "regulations": [
                    {"id": "guidance", "name": "Partnership Guidance", "cfr": None},
                    {"id": "guidance-2", "name": "Partnership Guidance 2", "cfr": ""},
                ],
            },
        ],
    }


@pytest.fixture
def lookup(sample_catalog: dict[str, Any]) -> CatalogRegulationLookup:
    return CatalogRegulationLookup.from_dict(sample_catalog)


@pytest.fixture
def narrative_text() -> str:
    """Plain-text rendering of a proposed rule."""
    return NARRATIVE_TEXT
