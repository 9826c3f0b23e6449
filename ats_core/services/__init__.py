"""
Business services for ats-core.

ATSService wires the query layer, the workflow engine and the matching
engine around one entity store.
"""

from ats_core.services.ats_service import ATSService, build_service

__all__ = [
    "ATSService",
    "build_service",
]
