# apps/domain/ports/__init__.py
"""
Ports - Interface Definitions (Dependency Inversion)

Ports define contracts between domain and infrastructure layers.
Domain depends on these interfaces, adapters implement them.

This enables:
- Domain testability (use in-memory implementations)
- Flexibility (swap the Django ORM for another store without changing domain)
- Clear boundaries (explicit dependencies)
"""
