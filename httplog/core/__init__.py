"""Core building blocks: configuration, exceptions and logging."""
