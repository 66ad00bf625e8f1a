"""Integration tests for the rose chart."""
