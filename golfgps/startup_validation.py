from __future__ import annotations

import logging
import os
from typing import List, Optional

from .config import env_bool, get_settings
from .courses.service import CatalogIntegrityReport, CourseLookupService, get_lookup_service
from .metrics import CATALOG_INTEGRITY_FAILURES

_LOG = logging.getLogger(__name__)


def check_catalog(service: Optional[CourseLookupService] = None) -> CatalogIntegrityReport:
    """Run the catalog integrity check, logging and counting what it finds."""

    report = (service or get_lookup_service()).verify_catalog()
    CATALOG_INTEGRITY_FAILURES.set(len(report.failures))
    for failure in report.failures:
        _LOG.warning("catalog integrity failure: %s", failure)
    for warning in report.stroke_index_warnings:
        _LOG.warning("stroke index problem: %s", warning)
    return report


def validate_startup(service: Optional[CourseLookupService] = None) -> CatalogIntegrityReport:
    """Fail fast on missing critical configuration.

    Catalog integrity failures only abort startup when ``STRICT_CATALOG`` is
    set; otherwise the affected courses are logged and the rest keep working.
    """

    errors: List[str] = []

    if env_bool("REQUIRE_API_KEY") and not os.getenv("API_KEY"):
        errors.append("API_KEY must be set when REQUIRE_API_KEY=1")

    report = check_catalog(service)
    if report.failures and get_settings().strict_catalog:
        errors.extend(report.failures)

    if errors:
        joined = "; ".join(errors)
        raise RuntimeError(f"Startup validation failed: {joined}")
    return report


__all__ = ["check_catalog", "validate_startup"]
