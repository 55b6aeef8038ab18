"""SQLAlchemy Core persistence for the user registry."""
