"""HTTP API for the dictation workspace (FastAPI)."""
