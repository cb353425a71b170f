"""
Regulation Details
==================

Assembles the full view of a single regulatory document: upstream
metadata, nearby facilities, related programs and regulations, and the
narrative sections of its text rendering.

Version: 0.1.0
"""

import asyncio
from typing import Any

from services.regulations.cfr import cfr_part_text, extract_cfrs
from services.regulations.client import EPAClient
from services.regulations.lookup import RegulationLookup
from services.regulations.sections import extract_sections
from shared.logging import get_logger
from shared.models.regulation import DocumentDetails


logger = get_logger(__name__)


# (argument, FRS query parameter, whether it enables the facility lookup)
FACILITY_FILTERS: tuple[tuple[str, str, bool], ...] = (
    ("zip", "zip_code", True),
    ("city", "city_name", True),
    ("street", "street_address", True),
    ("state_abbr", "state_abbr", False),
    ("program", "program_name", False),
)

# Index of the narrative text rendering within a document's file formats
NARRATIVE_FORMAT_INDEX = 1


def build_facility_query(filters: dict[str, str | None]) -> tuple[dict[str, str], bool]:
    """
    Map supplied filters onto FRS query parameters.

    State and program only narrow a facility lookup; zip, city or
    street is needed to trigger one.

    Returns:
        Tuple of (query parameters, whether facilities should be queried)
    """
    options: dict[str, str] = {}
    should_query = False

    for argument, parameter, selects in FACILITY_FILTERS:
        value = filters.get(argument)
        if value:
            options[parameter] = value
            should_query = should_query or selects

    return options, should_query


def unwrap_facilities(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the ``Results.FRSFacility`` list of an FRS response."""
    results = payload.get("Results") or {}
    facilities = results.get("FRSFacility") or []

    # A single match comes back as an object rather than a list
    if isinstance(facilities, dict):
        return [facilities]
    return list(facilities)


class DetailsFetcher:
    """Fetch and enrich regulatory document details."""

    def __init__(self, client: EPAClient, lookup: RegulationLookup) -> None:
        self.client = client
        self.lookup = lookup

    async def get_details(
        self,
        document_id: str,
        zip: str | None = None,
        state_abbr: str | None = None,
        city: str | None = None,
        street: str | None = None,
        program: str | None = None,
    ) -> DocumentDetails:
        """
        Get the details of a regulatory document.

        Args:
            document_id: Regulations.gov document ID
            zip: Facility zip code
            state_abbr: Facility state abbreviation
            city: Facility city
            street: Facility street address
            program: Facility program name

        Returns:
            Document metadata enriched with programs, regulations,
            narrative sections and matching facilities

        Raises:
            UpstreamError: An upstream API returned a structured error
            httpx.HTTPError: Any other transport failure
        """
        payload = await self.client.get_document(document_id)
        details = DocumentDetails.model_validate(payload)

        options, show_facilities = build_facility_query({
            "zip": zip,
            "state_abbr": state_abbr,
            "city": city,
            "street": street,
            "program": program,
        })

        facilities: list[dict[str, Any]] = []
        if show_facilities:
            facilities = unwrap_facilities(await self.client.get_facilities(options))

        cfrs = extract_cfrs(cfr_part_text(details.cfr_part))
        details.programs, details.all_regulations = await asyncio.gather(
            self.lookup.get_programs_by_cfr(cfrs),
            self.lookup.get_regulations_by_cfr(cfrs),
        )

        narrative_link = None
        if len(details.file_formats) > NARRATIVE_FORMAT_INDEX:
            narrative_link = details.file_formats[NARRATIVE_FORMAT_INDEX]

        has_narrative = bool(narrative_link)
        if narrative_link:
            text = await self.client.get_text(narrative_link)
            for field, value in extract_sections(text).items():
                setattr(details, field, value)

        details.facilities = facilities

        logger.info(
            "regulation_details_fetched",
            document_id=document_id,
            cfrs=cfrs,
            facilities=len(facilities),
            has_narrative=has_narrative,
        )

        return details
