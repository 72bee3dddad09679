"""Default configuration constants for the Seat Capacity & Closure Allocation Platform."""

# Site lifecycle statuses
SITE_STATUS_ACTIVE = "ACTIVE"
SITE_STATUS_CLOSING = "CLOSING"
SITE_STATUS_PLANNED = "PLANNED"
SITE_STATUS_CLOSED = "CLOSED"
SITE_STATUSES = [SITE_STATUS_ACTIVE, SITE_STATUS_CLOSING, SITE_STATUS_PLANNED, SITE_STATUS_CLOSED]

# Closure plan statuses (only PLANNED excludes a floor from capacity)
CLOSURE_STATUS_PLANNED = "PLANNED"
CLOSURE_STATUS_COMPLETED = "COMPLETED"
CLOSURE_STATUS_CANCELLED = "CANCELLED"
CLOSURE_STATUSES = [CLOSURE_STATUS_PLANNED, CLOSURE_STATUS_COMPLETED, CLOSURE_STATUS_CANCELLED]

# Risk classification thresholds (utilization %)
RISK_OVERFLOW_THRESHOLD = 100.0  # strictly above = OVERFLOW
RISK_THRESHOLD = 95.0            # at or above = RISK
WARNING_THRESHOLD = 85.0         # at or above = WARNING

RISK_CLOSED = "CLOSED"
RISK_OVERFLOW = "OVERFLOW"
RISK_RISK = "RISK"
RISK_WARNING = "WARNING"
RISK_OK = "OK"
RISK_LEVELS = [RISK_OK, RISK_WARNING, RISK_RISK, RISK_OVERFLOW, RISK_CLOSED]

# Utilization is always reported with one decimal place
UTILIZATION_DECIMALS = 1

# Calendar
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
MONTH_ABBREVIATIONS = [name[:3] for name in MONTH_NAMES]
LAST_MONTH_OF_YEAR = 12

# Risk colors shared by tables and charts
RISK_COLORS = {
    RISK_OK: "#4CAF50",
    RISK_WARNING: "#F5C542",
    RISK_RISK: "#E8734A",
    RISK_OVERFLOW: "#cc0000",
    RISK_CLOSED: "#9E9E9E",
}
