"""FLEETWATCH web application."""
