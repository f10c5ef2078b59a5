"""Attendance & leave ledger package.

Feature modules (employees, attendance, leave, payroll, approvals, ...) each
carry a domain model, a repository protocol with a MySQL implementation, a
service holding the business rules, and a thin Flask controller.
"""
