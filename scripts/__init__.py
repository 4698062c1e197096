"""Maintenance scripts for Quote Wall."""
