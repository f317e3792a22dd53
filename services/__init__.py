"""
Service layer for business logic.

This package contains the service class that runs a statement
workbook through parsing, trimming, row extraction and CSV export.
"""
