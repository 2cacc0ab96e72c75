"""Test helpers for language resolution tests."""
