"""
Regulations Service
===================

Details and search over EPA rulemaking documents, cross-referenced with
EPA programs by CFR part and with nearby regulated facilities.

Version: 0.1.0
"""

from services.regulations.cfr import extract_cfrs
from services.regulations.client import EPAClient
from services.regulations.details import DetailsFetcher
from services.regulations.errors import UpstreamError
from services.regulations.lookup import CatalogRegulationLookup, RegulationLookup
from services.regulations.search import SearchOrchestrator
from services.regulations.sections import extract_sections

__all__ = [
    "EPAClient",
    "UpstreamError",
    "DetailsFetcher",
    "SearchOrchestrator",
    "RegulationLookup",
    "CatalogRegulationLookup",
    "extract_cfrs",
    "extract_sections",
]
