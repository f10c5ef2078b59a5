"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_PENDING_LIMIT = 500
DEFAULT_ATTENDANCE_LOG_LIMIT = 100

# Starting allotment for a balance row that has never been touched.
DEFAULT_LEAVE_ALLOTMENT = {
    "casual": 12,
    "sick": 10,
    "earned": 15,
    "compensatory": 0,
}

COMPENSATORY_DAYS_PER_HOLIDAY = 1

# Flat salary figures (placeholders, not statutory).
BASIC_PAY = Decimal("25000")
HRA_RATE = Decimal("0.40")
CONVEYANCE_ALLOWANCE = Decimal("1600")
MEDICAL_ALLOWANCE = Decimal("1250")
PROFESSIONAL_TAX = Decimal("200")
PROVIDENT_FUND_RATE = Decimal("0.12")

DEFAULT_COMPANY_NAME = "VTC Employee"
DEFAULT_PRIMARY_COLOR = "#3B82F6"
