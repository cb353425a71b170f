"""
Shared Models
=============

Pydantic models shared across the regulations service.

Models:
- Regulation models (DocumentDetails, SearchCriteria, SearchResult)
- Catalog models (Program, RegulationRecord, ProgramPage)
- Common response models (ErrorResponse, HealthResponse)
"""

from shared.models.common import ErrorResponse, HealthResponse
from shared.models.regulation import (
    DocumentDetails,
    Program,
    ProgramPage,
    RegulationRecord,
    SearchCriteria,
    SearchResult,
)

__all__ = [
    "DocumentDetails",
    "Program",
    "ProgramPage",
    "RegulationRecord",
    "SearchCriteria",
    "SearchResult",
    "ErrorResponse",
    "HealthResponse",
]
