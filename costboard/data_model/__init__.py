from .base import ColumnDefinition, TableModel
from .costs import (
    APPS_SUBSCRIPTIONS,
    DERIVED_COST_IDS,
    EMPLOYEES_PAYROLL,
    GOVERNMENT_OBLIGATIONS,
    HEALTH_INSURANCE,
    OFFICE_RENT,
    OFFICE_SUPPLIES,
    CostCategory,
    default_cost_categories,
)
from .insurance import InsurancePolicyTableModel, insurance_monthly_total
from .obligations import ObligationTableModel, obligations_monthly_total
from .office_rent import (
    RENT_PERIODS,
    BranchTableModel,
    RentExpenseTableModel,
    branch_annual_total,
    period_cost,
    rent_monthly_total,
)
from .payroll import EmployeeTableModel, payroll_monthly_total
from .projects import (
    DEFAULT_ALLOCATION_PERCENTAGE,
    PROJECT_STATUSES,
    Project,
    ProjectTableModel,
    parse_iso_date,
    project_form_to_row,
    validate_date_range,
)
from .subscriptions import SubscriptionTableModel, subscriptions_monthly_total
from .supplies import SupplyTableModel, supplies_monthly_total, supply_monthly_cost

__all__ = [
    "APPS_SUBSCRIPTIONS",
    "DEFAULT_ALLOCATION_PERCENTAGE",
    "DERIVED_COST_IDS",
    "EMPLOYEES_PAYROLL",
    "GOVERNMENT_OBLIGATIONS",
    "HEALTH_INSURANCE",
    "OFFICE_RENT",
    "OFFICE_SUPPLIES",
    "PROJECT_STATUSES",
    "RENT_PERIODS",
    "BranchTableModel",
    "ColumnDefinition",
    "CostCategory",
    "EmployeeTableModel",
    "InsurancePolicyTableModel",
    "ObligationTableModel",
    "Project",
    "ProjectTableModel",
    "RentExpenseTableModel",
    "SubscriptionTableModel",
    "SupplyTableModel",
    "TableModel",
    "branch_annual_total",
    "default_cost_categories",
    "insurance_monthly_total",
    "obligations_monthly_total",
    "parse_iso_date",
    "payroll_monthly_total",
    "period_cost",
    "project_form_to_row",
    "rent_monthly_total",
    "subscriptions_monthly_total",
    "supplies_monthly_total",
    "supply_monthly_cost",
    "validate_date_range",
]
