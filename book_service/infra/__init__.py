"""Infrastructure adapters: database engine, logging and auth primitives."""
