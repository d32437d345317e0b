"""Data access for catalog entities and user accounts."""
