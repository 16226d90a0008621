"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_REQUIRED_ARRIVAL_OFFSET_MINUTES = 0
DEFAULT_GRACE_PERIOD_MINUTES = 0
DEFAULT_LATE_DEDUCTION_AMOUNT = Decimal("0")

DEFAULT_LEDGER_MAX_ATTEMPTS = 5
DEFAULT_LEDGER_RETRY_BACKOFF_SECONDS = 0.05

LATE_CHECKIN_TITLE = "Late Check-In"
LATE_CHECKIN_BODY = "A deduction of {amount} has been applied for late arrival."

FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"
FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
DEFAULT_FCM_TIMEOUT_SECONDS = 10.0
