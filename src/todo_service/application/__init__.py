"""Application – business operations."""
