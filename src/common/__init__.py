"""Shared helpers: errors, logging, HTTP and external process support."""
