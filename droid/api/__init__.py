"""HTTP surface — FastAPI app factory and read-only routes."""
