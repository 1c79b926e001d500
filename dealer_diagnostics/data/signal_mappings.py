"""
Question → signal mapping inventory.

Two static tables:

``CATEGORY_SIGNAL_MAP``
    Free-text question category → signal code.  Used only as a fallback for
    questions that have no explicit row below (lookups are case-insensitive;
    unknown categories resolve to ``NONE``).

``SIGNAL_MAPPINGS``
    One explicit row per live question.  Coverage of the live questionnaire
    must be 100% — a gap is a data-authoring defect, caught by tests and by
    ``dealer-diagnostics check-tables``, never by a runtime failure.

Authoring rules used for the rows:
  - volume / capacity / availability questions → CAPACITY_MISALIGNED
  - conversion / efficiency / quality → PROCESS_NOT_EXECUTED
  - satisfaction / profitability / financial → KPI_NOT_REVIEWED
  - digital / technology → TOOL_UNDERUTILISED
  - training / certification → ROLE_OWNERSHIP_MISSING
  - inventory / pricing / accuracy → PROCESS_NOT_STANDARDISED
  - costs / floorplan / vendor / obsolete stock → GOVERNANCE_WEAK
"""

from __future__ import annotations

from dealer_diagnostics.models.signal import SignalMapping
from dealer_diagnostics.taxonomy.module_taxonomy import ModuleKey
from dealer_diagnostics.taxonomy.signal_taxonomy import SeverityRule, SignalCode

_S = SignalCode
_STD = SeverityRule.STANDARD
_WTD = SeverityRule.WEIGHTED

CATEGORY_SIGNAL_MAP: dict[str, SignalCode] = {
    # Volume and conversion
    "volume":        _S.CAPACITY_MISALIGNED,
    "conversion":    _S.PROCESS_NOT_EXECUTED,
    # Customer satisfaction and profitability
    "satisfaction":  _S.KPI_NOT_REVIEWED,
    "profitability": _S.KPI_NOT_REVIEWED,
    # Efficiency and process
    "efficiency":    _S.PROCESS_NOT_EXECUTED,
    # Digital and technology
    "digital":       _S.TOOL_UNDERUTILISED,
    "technology":    _S.TOOL_UNDERUTILISED,
    # Training and development
    "training":      _S.ROLE_OWNERSHIP_MISSING,
    "certification": _S.ROLE_OWNERSHIP_MISSING,
    # Inventory
    "inventory":     _S.PROCESS_NOT_STANDARDISED,
    "turnover":      _S.PROCESS_NOT_STANDARDISED,
    "obsolete":      _S.GOVERNANCE_WEAK,
    # Financial operations
    "financial":     _S.KPI_NOT_REVIEWED,
    "cashflow":      _S.KPI_NOT_REVIEWED,
    "floorplan":     _S.GOVERNANCE_WEAK,
    "costs":         _S.GOVERNANCE_WEAK,
    # Pricing, quality and accuracy
    "pricing":       _S.PROCESS_NOT_STANDARDISED,
    "quality":       _S.PROCESS_NOT_EXECUTED,
    "accuracy":      _S.PROCESS_NOT_STANDARDISED,
    # Capacity
    "availability":  _S.CAPACITY_MISALIGNED,
    "productivity":  _S.CAPACITY_MISALIGNED,
    "facility":      _S.CAPACITY_MISALIGNED,
    # Service
    "warranty":      _S.PROCESS_NOT_EXECUTED,
    "retention":     _S.KPI_NOT_REVIEWED,
    "express":       _S.PROCESS_NOT_EXECUTED,
    # Parts and supply chain
    "parts":         _S.CAPACITY_MISALIGNED,
    "emergency":     _S.CAPACITY_MISALIGNED,
    "vendor":        _S.GOVERNANCE_WEAK,
    "wholesale":     _S.PROCESS_NOT_STANDARDISED,
    "returns":       _S.PROCESS_NOT_EXECUTED,
    "counter":       _S.PROCESS_NOT_EXECUTED,
    # Data
    "data":          _S.TOOL_UNDERUTILISED,
}


def _row(
    question_id: str,
    module_key: ModuleKey,
    primary: SignalCode,
    secondary: SignalCode | None,
    rule: SeverityRule,
    notes: str,
) -> SignalMapping:
    return SignalMapping(
        question_id=question_id,
        module_key=module_key,
        primary_signal_code=primary,
        secondary_signal_code=secondary,
        severity_rule=rule,
        notes=notes,
    )


_NVS = ModuleKey.NEW_VEHICLE_SALES
_UVS = ModuleKey.USED_VEHICLE_SALES
_SVC = ModuleKey.SERVICE_PERFORMANCE
_PTS = ModuleKey.PARTS_INVENTORY
_FIN = ModuleKey.FINANCIAL_OPERATIONS


SIGNAL_MAPPINGS: tuple[SignalMapping, ...] = (
    # ── New vehicle sales (nvs-1 .. nvs-10) ───────────────────────────────────
    _row("nvs-1", _NVS, _S.CAPACITY_MISALIGNED, _S.KPI_NOT_REVIEWED, _WTD,
         "Volume metric - capacity alignment issue if low"),
    _row("nvs-2", _NVS, _S.PROCESS_NOT_EXECUTED, _S.KPI_NOT_REVIEWED, _WTD,
         "Conversion metric - sales process execution"),
    _row("nvs-3", _NVS, _S.KPI_NOT_REVIEWED, None, _STD,
         "Customer satisfaction - KPI tracking issue"),
    _row("nvs-4", _NVS, _S.KPI_NOT_REVIEWED, _S.PROCESS_NOT_STANDARDISED, _WTD,
         "Profitability metric - pricing strategy"),
    _row("nvs-5", _NVS, _S.PROCESS_NOT_EXECUTED, None, _STD,
         "Efficiency metric - delivery process"),
    _row("nvs-6", _NVS, _S.TOOL_UNDERUTILISED, _S.PROCESS_NOT_EXECUTED, _WTD,
         "Digital metric - online lead conversion"),
    _row("nvs-7", _NVS, _S.ROLE_OWNERSHIP_MISSING, None, _STD,
         "Training metric - staff development"),
    _row("nvs-8", _NVS, _S.PROCESS_NOT_STANDARDISED, _S.GOVERNANCE_WEAK, _WTD,
         "Inventory turnover - stock management"),
    _row("nvs-9", _NVS, _S.KPI_NOT_REVIEWED, _S.PROCESS_NOT_EXECUTED, _WTD,
         "Financial metric - F&I penetration"),
    _row("nvs-10", _NVS, _S.TOOL_UNDERUTILISED, None, _STD,
         "Technology metric - CRM utilization"),

    # ── Used vehicle sales (uvs-1 .. uvs-10) ──────────────────────────────────
    _row("uvs-1", _UVS, _S.PROCESS_NOT_STANDARDISED, _S.GOVERNANCE_WEAK, _WTD,
         "Turnover metric - inventory management"),
    _row("uvs-2", _UVS, _S.KPI_NOT_REVIEWED, _S.PROCESS_NOT_STANDARDISED, _WTD,
         "Profitability metric - pricing strategy"),
    _row("uvs-3", _UVS, _S.PROCESS_NOT_STANDARDISED, None, _WTD,
         "Accuracy metric - appraisal process"),
    _row("uvs-4", _UVS, _S.GOVERNANCE_WEAK, _S.PROCESS_NOT_EXECUTED, _WTD,
         "Cost metric - reconditioning efficiency"),
    _row("uvs-5", _UVS, _S.TOOL_UNDERUTILISED, None, _STD,
         "Digital metric - pricing tools"),
    _row("uvs-6", _UVS, _S.CAPACITY_MISALIGNED, None, _WTD,
         "Inventory balance - trade-in vs acquisition"),
    _row("uvs-7", _UVS, _S.KPI_NOT_REVIEWED, None, _STD,
         "Customer satisfaction - used car experience"),
    _row("uvs-8", _UVS, _S.TOOL_UNDERUTILISED, _S.PROCESS_NOT_EXECUTED, _WTD,
         "Digital metric - online presence"),
    _row("uvs-9", _UVS, _S.PROCESS_NOT_STANDARDISED, None, _WTD,
         "Pricing metric - market positioning"),
    _row("uvs-10", _UVS, _S.GOVERNANCE_WEAK, _S.PROCESS_NOT_STANDARDISED, _WTD,
         "Inventory metric - aged stock management"),

    # ── Service performance (svc-1 .. svc-12) ─────────────────────────────────
    _row("svc-1", _SVC, _S.CAPACITY_MISALIGNED, _S.PROCESS_NOT_EXECUTED, _WTD,
         "Efficiency metric - labor utilization"),
    _row("svc-2", _SVC, _S.PROCESS_NOT_STANDARDISED, _S.KPI_NOT_REVIEWED, _WTD,
         "Pricing metric - labor rate realization"),
    _row("svc-3", _SVC, _S.CAPACITY_MISALIGNED, None, _WTD,
         "Availability metric - appointment capacity"),
    _row("svc-4", _SVC, _S.PROCESS_NOT_EXECUTED, _S.ROLE_OWNERSHIP_MISSING, _WTD,
         "Quality metric - first-time fix rate"),
    _row("svc-5", _SVC, _S.KPI_NOT_REVIEWED, None, _WTD,
         "Satisfaction metric - service experience"),
    _row("svc-6", _SVC, _S.PROCESS_NOT_EXECUTED, None, _WTD,
         "Warranty metric - claim processing"),
    _row("svc-7", _SVC, _S.ROLE_OWNERSHIP_MISSING, None, _STD,
         "Certification metric - technician skills"),
    _row("svc-8", _SVC, _S.KPI_NOT_REVIEWED, _S.GOVERNANCE_WEAK, _WTD,
         "Retention metric - customer loyalty"),
    _row("svc-9", _SVC, _S.CAPACITY_MISALIGNED, None, _WTD,
         "Parts metric - service parts availability"),
    _row("svc-10", _SVC, _S.TOOL_UNDERUTILISED, None, _STD,
         "Digital metric - customer communication tools"),
    _row("svc-11", _SVC, _S.CAPACITY_MISALIGNED, _S.PROCESS_NOT_EXECUTED, _WTD,
         "Productivity metric - advisor throughput"),
    _row("svc-12", _SVC, _S.PROCESS_NOT_EXECUTED, None, _STD,
         "Express metric - quick service efficiency"),

    # ── Parts and inventory (pts-1 .. pts-10) ─────────────────────────────────
    _row("pts-1", _PTS, _S.PROCESS_NOT_STANDARDISED, _S.GOVERNANCE_WEAK, _WTD,
         "Turnover metric - inventory management"),
    _row("pts-2", _PTS, _S.CAPACITY_MISALIGNED, None, _WTD,
         "Availability metric - parts fill rate"),
    _row("pts-3", _PTS, _S.KPI_NOT_REVIEWED, _S.PROCESS_NOT_STANDARDISED, _WTD,
         "Profitability metric - parts margin"),
    _row("pts-4", _PTS, _S.GOVERNANCE_WEAK, None, _WTD,
         "Obsolete metric - dead stock management"),
    _row("pts-5", _PTS, _S.PROCESS_NOT_STANDARDISED, None, _WTD,
         "Accuracy metric - order accuracy"),
    _row("pts-6", _PTS, _S.PROCESS_NOT_STANDARDISED, None, _STD,
         "Wholesale metric - external sales"),
    _row("pts-7", _PTS, _S.PROCESS_NOT_EXECUTED, None, _WTD,
         "Returns metric - error rate"),
    _row("pts-8", _PTS, _S.CAPACITY_MISALIGNED, None, _STD,
         "Emergency metric - urgent sourcing"),
    _row("pts-9", _PTS, _S.PROCESS_NOT_EXECUTED, None, _STD,
         "Counter metric - service speed"),
    _row("pts-10", _PTS, _S.GOVERNANCE_WEAK, None, _STD,
         "Vendor metric - supplier relationships"),

    # ── Financial operations (fin-1 .. fin-8) ─────────────────────────────────
    _row("fin-1", _FIN, _S.KPI_NOT_REVIEWED, _S.GOVERNANCE_WEAK, _WTD,
         "Profitability metric - overall trend"),
    _row("fin-2", _FIN, _S.KPI_NOT_REVIEWED, _S.GOVERNANCE_WEAK, _WTD,
         "Cashflow metric - financial stability"),
    _row("fin-3", _FIN, _S.GOVERNANCE_WEAK, None, _WTD,
         "Floorplan metric - financing management"),
    _row("fin-4", _FIN, _S.GOVERNANCE_WEAK, _S.PROCESS_NOT_STANDARDISED, _WTD,
         "Costs metric - expense control"),
    _row("fin-5", _FIN, _S.CAPACITY_MISALIGNED, None, _WTD,
         "Productivity metric - revenue per employee"),
    _row("fin-6", _FIN, _S.TOOL_UNDERUTILISED, None, _WTD,
         "Technology metric - ROI on investments"),
    _row("fin-7", _FIN, _S.CAPACITY_MISALIGNED, None, _WTD,
         "Facility metric - space utilization"),
    _row("fin-8", _FIN, _S.TOOL_UNDERUTILISED, None, _STD,
         "Data metric - customer database management"),
)
