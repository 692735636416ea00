"""
ReportForge CLI Package

Command-line interface for the employee records and PDF report service.
Provides commands for database setup, adding users, generating reports
and running the API server.

Usage:
    reportforge init-db --seed
    reportforge add-user --name "Ada Lovelace" --email ada@example.com ...
    reportforge generate --type summary --user-id 1 --user-id 2
    reportforge list-reports
    reportforge serve --host 0.0.0.0 --port 3001
"""

__version__ = "0.1.0"
__author__ = "ReportForge Team"

from cli.main import app

__all__ = ["app", "__version__"]
