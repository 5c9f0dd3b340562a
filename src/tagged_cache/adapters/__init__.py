"""Adapters – concrete primary-store backends."""
