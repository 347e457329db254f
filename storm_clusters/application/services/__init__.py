"""Application services."""

from .storm_damage_analysis_service import AnalysisReport, StormDamageAnalysisService

__all__ = [
    "AnalysisReport",
    "StormDamageAnalysisService",
]
