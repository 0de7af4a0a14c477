"""Operational scripts for SalaryWatch."""
