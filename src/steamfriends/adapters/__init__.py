"""Adapters connecting the domain to Steam and to the database."""
