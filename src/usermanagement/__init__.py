"""User management service: validated CRUD over a single ``users`` table."""
