"""Aave position health factor calculator."""
