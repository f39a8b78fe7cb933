"""Record store: engine, session factory and ORM models."""
