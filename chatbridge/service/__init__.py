"""Service layer: chat sessions, settings, reporting and the CLI."""
