"""Service layer for the Mission Control backend."""
