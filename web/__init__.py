"""
Web application package for the infinite chess server.

Provides the FastAPI HTTP API over the shared board and a small browser
client that renders a scrollable window of the unbounded board.
Run with: uvicorn web.app:app
"""
