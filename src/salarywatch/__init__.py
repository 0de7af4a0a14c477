"""SalaryWatch: community salary transparency service."""

__version__ = "0.1.0"
