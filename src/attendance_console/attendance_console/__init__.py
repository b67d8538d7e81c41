"""Attendance Console package.

Validation and business-rule engine for the student attendance console,
organized by feature modules (students, subjects, enrollments, attendance,
users) with a thin Flask controller layer over plain service classes.
"""
