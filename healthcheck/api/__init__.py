"""HTTP surface — FastAPI router and app factory."""
