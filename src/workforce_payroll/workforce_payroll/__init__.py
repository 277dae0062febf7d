"""Workforce Payroll package.

Organized by feature modules (organization, attendance, prepayments, payroll)
with a thin Flask controller layer on top of service/repository layers.
The payroll engine turns a section's monthly attendance snapshot into
per-employee payment rows.
"""
