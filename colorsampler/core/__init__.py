"""Logging and configuration plumbing shared across colorsampler."""
