"""
Core modules for statement cleaning.

This package contains:
- config: Application configuration and settings
- exceptions: Custom exception classes
- exporters: CSV and zip output
- logger: Logging configuration
- normalize: Boilerplate trimming and row extraction
- parsing: Workbook loading and merge normalization
- schema: Pydantic models for layout and ledger
"""
