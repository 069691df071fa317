"""Rendering helpers for lattices and pricing results (tables, CSV, plots)."""
