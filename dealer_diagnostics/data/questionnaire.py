"""
The live dealership assessment questionnaire.

Five sections, 50 scaled (1..5) questions.  Every question id here must have
exactly one row in ``dealer_diagnostics.data.signal_mappings.SIGNAL_MAPPINGS``
(checked by ``tests/test_signals/test_signal_mapping.py`` and
``dealer-diagnostics check-tables``).
"""

from __future__ import annotations

from dealer_diagnostics.models.question import Question, Questionnaire, QuestionnaireSection
from dealer_diagnostics.taxonomy.module_taxonomy import ModuleKey


def _section(
    module_key: ModuleKey,
    title: str,
    rows: list[tuple[str, str, float, str, tuple[str, ...]]],
) -> QuestionnaireSection:
    return QuestionnaireSection(
        module_key=module_key,
        title=title,
        questions=tuple(
            Question(
                question_id=qid,
                module_key=module_key,
                text=text,
                weight=weight,
                category=category,
                linked_kpis=kpis,
            )
            for qid, text, weight, category, kpis in rows
        ),
    )


# (question_id, text, weight, category, linked_kpis)

_NEW_VEHICLE_SALES = [
    ("nvs-1", "What is your average monthly new vehicle sales volume?", 1.2, "volume",
     ("Monthly Revenue", "Market Share", "Sales Growth Rate", "Inventory Turnover")),
    ("nvs-2", "How would you rate your sales team's closing ratio?", 1.5, "conversion",
     ("Lead Conversion Rate", "Sales Efficiency", "Cost Per Acquisition", "Revenue Per Lead")),
    ("nvs-3", "Customer satisfaction score for new vehicle sales process", 1.3, "satisfaction",
     ("Net Promoter Score", "Customer Retention Rate", "Referral Rate", "Online Review Ratings")),
    ("nvs-4", "Average gross profit per new vehicle sold", 1.4, "profitability",
     ("Gross Profit Margin", "Price Realization", "Discount Rate", "Profitability Per Unit")),
    ("nvs-5", "Time from customer inquiry to delivery", 1.1, "efficiency",
     ("Cycle Time", "Process Efficiency", "Customer Wait Time", "Deal Completion Rate")),
    ("nvs-6", "Digital lead conversion rate", 1.2, "digital",
     ("Digital Marketing ROI", "Online Lead Quality", "Website Conversion Rate", "Digital Channel Performance")),
    ("nvs-7", "Sales team training frequency", 1.0, "training",
     ("Sales Performance", "Employee Retention", "Skill Development Index", "Training ROI")),
    ("nvs-8", "Inventory turnover rate", 1.3, "inventory",
     ("Inventory Days Supply", "Carrying Costs", "Cash Flow", "Working Capital Efficiency")),
    ("nvs-9", "Finance & Insurance penetration rate", 1.2, "financial",
     ("F&I Revenue Per Unit", "Product Penetration Rate", "Customer Protection Rate", "Profit Per Deal")),
    ("nvs-10", "CRM system utilization effectiveness", 1.1, "technology",
     ("Lead Management Efficiency", "Follow-up Rate", "Customer Data Quality", "Sales Process Consistency")),
]

_USED_VEHICLE_SALES = [
    ("uvs-1", "Used vehicle inventory turnover rate", 1.4, "turnover",
     ("Days in Inventory", "Carrying Costs", "Interest Expense", "Market Share")),
    ("uvs-2", "Used vehicle gross profit margins", 1.5, "profitability",
     ("Gross Profit Per Unit", "Margin Percentage", "Price Realization", "Competitive Positioning")),
    ("uvs-3", "Trade-in appraisal accuracy", 1.2, "accuracy",
     ("Appraisal Accuracy Rate", "Acquisition Cost Variance", "Profit Margin Consistency", "Market Value Alignment")),
    ("uvs-4", "Reconditioning cost control", 1.3, "costs",
     ("Reconditioning Cost Per Unit", "Time to Market", "Quality Standards", "Vendor Performance")),
    ("uvs-5", "Online listing optimization", 1.1, "digital",
     ("Online Lead Generation", "Listing View Rate", "Inquiry Conversion", "Digital Market Penetration")),
    ("uvs-6", "Auction purchase success rate", 1.2, "sourcing",
     ("Acquisition Success Rate", "Purchase Cost Accuracy", "Inventory Quality", "Sourcing Efficiency")),
    ("uvs-7", "Customer satisfaction with used vehicle purchases", 1.3, "satisfaction",
     ("Customer Satisfaction Score", "Repeat Customer Rate", "Referral Rate", "Online Review Ratings")),
    ("uvs-8", "Warranty and service contract penetration", 1.1, "penetration",
     ("Product Penetration Rate", "Revenue Per Unit", "Customer Protection Rate", "Profit Margin Enhancement")),
    ("uvs-9", "Vehicle pricing competitiveness", 1.2, "pricing",
     ("Price Competitiveness Index", "Market Position", "Sales Velocity", "Profit Margin")),
    ("uvs-10", "Aged inventory management", 1.3, "inventory",
     ("Aged Inventory Percentage", "Carrying Cost Management", "Loss Prevention", "Cash Flow Optimization")),
]

_SERVICE_PERFORMANCE = [
    ("svc-1", "Service department labor efficiency", 1.5, "efficiency",
     ("Labor Utilization Rate", "Productive Hours", "Technician Efficiency", "Revenue Per Hour")),
    ("svc-2", "Customer pay labor rate utilization", 1.4, "pricing",
     ("Effective Labor Rate", "Price Realization", "Service Revenue", "Profit Margin")),
    ("svc-3", "Service appointment availability", 1.3, "availability",
     ("Appointment Lead Time", "Capacity Utilization", "Customer Convenience", "Service Accessibility")),
    ("svc-4", "First-time fix rate", 1.4, "quality",
     ("Quality Index", "Rework Rate", "Customer Satisfaction", "Diagnostic Accuracy")),
    ("svc-5", "Service customer satisfaction scores", 1.5, "satisfaction",
     ("Net Promoter Score", "Customer Retention Rate", "Referral Rate", "Service Loyalty")),
    ("svc-6", "Warranty recovery rate", 1.2, "warranty",
     ("Warranty Recovery Rate", "Process Compliance", "Administrative Efficiency", "Profit Recovery")),
    ("svc-7", "Technician certification levels", 1.1, "certification",
     ("Certification Rate", "Technical Competency", "Training Investment", "Service Quality")),
    ("svc-8", "Service retention rate", 1.3, "retention",
     ("Customer Retention Rate", "Service Loyalty", "Repeat Business", "Customer Lifetime Value")),
    ("svc-9", "Parts availability for service", 1.2, "parts",
     ("Parts Fill Rate", "Service Efficiency", "Customer Wait Time", "Inventory Management")),
    ("svc-10", "Digital service communication", 1.0, "digital",
     ("Digital Adoption Rate", "Customer Communication", "Process Efficiency", "Customer Experience")),
    ("svc-11", "Service advisor productivity", 1.3, "productivity",
     ("Advisor Productivity", "Service Capacity", "Revenue Per Advisor", "Customer Throughput")),
    ("svc-12", "Express service efficiency", 1.1, "express",
     ("Express Service Volume", "Customer Convenience", "Service Speed", "Operational Efficiency")),
]

_PARTS_INVENTORY = [
    ("pts-1", "Parts inventory turnover rate", 1.5, "turnover",
     ("Inventory Turnover Rate", "Cash Flow", "Carrying Costs", "Working Capital Efficiency")),
    ("pts-2", "Parts fill rate", 1.4, "availability",
     ("Parts Availability", "Service Efficiency", "Customer Satisfaction", "Stock-out Rate")),
    ("pts-3", "Parts gross profit margin", 1.5, "profitability",
     ("Gross Profit Margin", "Price Realization", "Competitive Position", "Parts Revenue")),
    ("pts-4", "Obsolete parts percentage", 1.3, "obsolete",
     ("Obsolete Inventory Rate", "Inventory Risk", "Cash Flow Impact", "Inventory Quality")),
    ("pts-5", "Parts ordering accuracy", 1.2, "accuracy",
     ("Order Accuracy Rate", "Process Efficiency", "Error Reduction", "Customer Satisfaction")),
    ("pts-6", "Wholesale parts sales performance", 1.1, "wholesale",
     ("Wholesale Revenue", "Market Share", "Customer Base Expansion", "Revenue Diversification")),
    ("pts-7", "Parts return rate", 1.2, "returns",
     ("Return Rate", "Process Quality", "Customer Satisfaction", "Operational Costs")),
    ("pts-8", "Emergency parts procurement", 1.1, "emergency",
     ("Emergency Response Time", "Supplier Relationships", "Service Completion Rate", "Customer Satisfaction")),
    ("pts-9", "Parts counter efficiency", 1.0, "efficiency",
     ("Processing Time", "Customer Wait Time", "Staff Productivity", "Service Efficiency")),
    ("pts-10", "Vendor relationship management", 1.1, "vendor",
     ("Supplier Performance", "Cost Management", "Supply Reliability", "Partnership Quality")),
]

_FINANCIAL_OPERATIONS = [
    ("fin-1", "Overall dealership profitability trend", 2.0, "profitability",
     ("Net Profit Margin", "ROI", "Revenue Growth", "Operating Efficiency")),
    ("fin-2", "Cash flow management", 1.8, "cashflow",
     ("Cash Flow Consistency", "Working Capital", "Liquidity Ratios", "Financial Stability")),
    ("fin-3", "Floor plan management efficiency", 1.5, "floorplan",
     ("Interest Cost Management", "Inventory Efficiency", "Days in Stock", "Financing Optimization")),
    ("fin-4", "Cost control effectiveness", 1.6, "costs",
     ("Operating Expense Ratio", "Cost Per Unit", "Expense Management", "Operational Efficiency")),
    ("fin-5", "Employee productivity metrics", 1.4, "productivity",
     ("Revenue Per Employee", "Staff Efficiency", "Productivity Index", "Human Resource ROI")),
    ("fin-6", "Technology investment ROI", 1.2, "technology",
     ("Technology ROI", "Digital Efficiency", "System Utilization", "Innovation Index")),
    ("fin-7", "Facility utilization efficiency", 1.3, "facility",
     ("Facility Utilization Rate", "Space Productivity", "Asset Efficiency", "Layout Optimization")),
    ("fin-8", "Customer database value", 1.1, "data",
     ("Data Quality Index", "Customer Insights", "Marketing Effectiveness", "Business Intelligence")),
]


QUESTIONNAIRE: Questionnaire = Questionnaire(
    title="Dealership Performance Assessment",
    sections=(
        _section(ModuleKey.NEW_VEHICLE_SALES, "New Vehicle Sales Performance", _NEW_VEHICLE_SALES),
        _section(ModuleKey.USED_VEHICLE_SALES, "Used Vehicle Sales Performance", _USED_VEHICLE_SALES),
        _section(ModuleKey.SERVICE_PERFORMANCE, "Service Performance", _SERVICE_PERFORMANCE),
        _section(ModuleKey.PARTS_INVENTORY, "Parts and Inventory Performance", _PARTS_INVENTORY),
        _section(
            ModuleKey.FINANCIAL_OPERATIONS,
            "Financial Operations & Overall Performance",
            _FINANCIAL_OPERATIONS,
        ),
    ),
)

TOTAL_QUESTIONS: int = len(QUESTIONNAIRE.all_question_ids())
