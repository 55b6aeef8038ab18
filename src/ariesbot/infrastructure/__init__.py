"""Infrastructure layer — database access and the role/member directory."""
