"""Attendance Engine package.

Organized by feature modules (timeparse, attendance, leave, summary, payroll,
reports) with pure calculators behind repository protocols.
"""
