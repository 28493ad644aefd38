"""Forwarding decision services."""
