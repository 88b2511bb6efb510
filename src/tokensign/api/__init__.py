"""HTTP surface for tokensign (FastAPI)."""
