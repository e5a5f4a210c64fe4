"""Core primitives: settings, logging, errors, security and storage."""
