"""Employee Time Tracker package.

Organized by feature modules (employees, attendance, payroll, storage) with
plain service classes at the core and a thin Flask controller layer on top.
"""
