from __future__ import annotations

import os
import platform
import time
from typing import Any, Dict

from fastapi import Depends, Request

from golfgps.config import get_settings
from golfgps.courses.service import CourseLookupService, get_lookup_service


async def health(
    request: Request, service: CourseLookupService = Depends(get_lookup_service)
) -> Dict[str, Any]:
    """Liveness plus a summary of the catalog check run at startup."""

    settings = get_settings()
    report = getattr(request.app.state, "catalog_report", None)
    failures = list(report.failures) if report is not None else []
    return {
        "status": "degraded" if failures else "ok",
        "version": os.getenv("BUILD_VERSION", "dev"),
        "ts": time.time(),
        "catalog": {
            "courses": len(service.list_courses()),
            "checked": report is not None,
            "failures": failures,
        },
        "edits": {
            "persisted": settings.edits_path is not None,
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }


__all__ = ["health"]
