"""Versioned HTTP API routers."""
