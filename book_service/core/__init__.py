"""Core building blocks: settings, exceptions, database and pagination."""
