"""
Integration tests package.

Ejecutan los casos de uso contra los repositorios SQLAlchemy sobre SQLite
in-memory (aiosqlite):

    pytest tests/integration/
"""
