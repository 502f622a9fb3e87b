"""HTTP API for web and mobile reader front ends.

WHY: Front ends render frames and run their own timers, but share the
server's extraction, tokenization and fixation logic so every client
splits and paces text identically.

HOW: app.py defines the FastAPI app and routes, models.py the pydantic
schemas, documents.py the in-memory DocumentStore.
"""
