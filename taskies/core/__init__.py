"""Shared infrastructure: exceptions, logging, paths and temporary files."""
