"""
Backend package for the read-only profile API.

Serves the shaped powerlifting and speedcubing profiles from views that stay
subscribed to the Realtime Database for the lifetime of the FastAPI app.
"""
