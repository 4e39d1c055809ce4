"""Simulator CLI streaming generated readings to the monitor service."""
