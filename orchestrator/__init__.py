"""
Orchestration package for coordinating the documentation build phases.

This package sequences the build: Fetch → Convert → Rewrite → Export → Report.
"""

from .build_orchestrator import BuildOrchestrator
from .build_report import BuildReport

__all__ = [
    'BuildOrchestrator',
    'BuildReport'
]
