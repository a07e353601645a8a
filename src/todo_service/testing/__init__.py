"""Testing – in-memory doubles and failure injection for the todo service."""
