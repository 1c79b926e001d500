"""
Signal derivation: module scores → coded operational weaknesses.

Modules
-------
mapping    : question → SignalMapping resolution (explicit row or category
             fallback) + validate_mapping_coverage() → CoverageReport.
aggregator : aggregate_signals() — threshold, severity, grouping, ordering.
"""

from dealer_diagnostics.signals.aggregator import aggregate_signals
from dealer_diagnostics.signals.mapping import (
    CoverageReport,
    get_mappings_for_module,
    get_signal_mapping,
    resolve_category_signal,
    resolve_question_mapping,
    validate_mapping_coverage,
)

__all__ = [
    "CoverageReport",
    "aggregate_signals",
    "get_mappings_for_module",
    "get_signal_mapping",
    "resolve_category_signal",
    "resolve_question_mapping",
    "validate_mapping_coverage",
]
