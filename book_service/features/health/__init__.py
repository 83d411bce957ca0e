"""Liveness and database health endpoint."""
