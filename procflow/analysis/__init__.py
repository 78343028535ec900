"""Analysis overlay."""

from procflow.analysis.overlay import AnalysisOverlay

__all__ = ["AnalysisOverlay"]
