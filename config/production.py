import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATA_DIR = os.getenv("DATA_DIR", "/var/lib/time-tracker")
EMPLOYEES_FILE = os.getenv("EMPLOYEES_FILE", "employees.json")
TIME_RECORDS_FILE = os.getenv("TIME_RECORDS_FILE", "timerecords.txt")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

AUTO_SAVE_ON_EXIT = bool(int(os.getenv("AUTO_SAVE_ON_EXIT", "1")))
