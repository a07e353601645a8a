"""Kernel – errors, outcome types and the clock port."""
