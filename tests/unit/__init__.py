"""Unit tests for the rose chart."""
