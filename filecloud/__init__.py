"""File storage backend with token sessions."""
