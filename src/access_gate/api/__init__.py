"""HTTP API layer — FastAPI routes, dependencies and middleware."""
