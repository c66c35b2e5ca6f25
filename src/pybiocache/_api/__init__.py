"""Biocache web-service endpoint modules (internal)."""
