"""Shared infrastructure: configuration, logging, resilience, command execution."""
