"""Core configuration for the catalog client."""
