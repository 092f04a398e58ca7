"""
Book Review API Package

A small book-review service: users register, log in, and manage their own
text reviews on a fixed catalog of books.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- exceptions.py: Domain errors and their HTTP status codes
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- stores/: In-memory catalog and user directory
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Tokens, sessions, rate limiting, latency simulation
"""

__version__ = "1.0.0"
