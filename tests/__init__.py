"""
Test suite for the rose chart.

This package contains:
- Unit tests for the chart engine, ingestion, settings and report
- Integration tests for the full render flow
- Sample dataset fixtures
"""
