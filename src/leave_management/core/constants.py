"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LEAVE_BALANCE = 20
RECENT_ACTIVITY_LIMIT = 5
DEFAULT_COMMIT_ATTEMPTS = 3

# Persisted table names
USERS_TABLE = "users"
LEAVE_REQUESTS_TABLE = "leaveRequests"
CREDENTIALS_TABLE = "credentials"
SESSION_TABLE = "currentUser"

ISO_DATE_FORMAT = "%Y-%m-%d"
