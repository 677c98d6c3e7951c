import os

SECRET_KEY = "test-secret"

DATA_DIR = os.getenv("DATA_DIR", "test-data")
EMPLOYEES_FILE = "employees.json"
TIME_RECORDS_FILE = "timerecords.txt"

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_SAVE_ON_EXIT = False
