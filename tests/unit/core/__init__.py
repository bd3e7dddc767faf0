"""Unit tests for logging and config plumbing."""
