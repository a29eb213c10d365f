"""faceclock package.

Attendance ledger for face-verified check-in/check-out, organized by feature
modules (attendance, reports, payroll, employees, ...) with a thin Flask
controller layer over service/repository layers.
"""
