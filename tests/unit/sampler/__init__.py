"""Unit tests for the color sampling pipeline."""
