"""Shared protocol constants between the runtime and the web UI."""
