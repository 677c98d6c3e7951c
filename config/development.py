import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DATA_DIR = os.getenv("DATA_DIR", "data")
EMPLOYEES_FILE = os.getenv("EMPLOYEES_FILE", "employees.json")
TIME_RECORDS_FILE = os.getenv("TIME_RECORDS_FILE", "timerecords.txt")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# Save roster and ledger when the process exits
AUTO_SAVE_ON_EXIT = bool(int(os.getenv("AUTO_SAVE_ON_EXIT", "1")))
