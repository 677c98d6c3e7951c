"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta
from decimal import Decimal

MAX_SHIFT_HOURS = 72.0
CLOCK_SKEW_TOLERANCE = timedelta(minutes=1)

MAX_MONEY_VALUE = Decimal("1000000000")
MONEY_QUANTUM = Decimal("0.01")
MAX_EMPLOYEE_ID_LENGTH = 40

RECORD_ID_PREFIX = "TR"
RECORD_ID_WIDTH = 4

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NULL_TIMESTAMP = "NULL"
RECORD_FIELD_SEPARATOR = "|"

DEFAULT_EMPLOYEES_FILE = "employees.json"
DEFAULT_TIME_RECORDS_FILE = "timerecords.txt"
TEMP_SUFFIX = ".tmp"
BACKUP_SUFFIX = ".bak"
