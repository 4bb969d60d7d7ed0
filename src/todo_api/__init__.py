"""
In-memory Todo backend built on FastAPI.

Use `todo_api.main.create_app()` to build an application with its own store,
or import the module-level `todo_api.main.app`.
"""

__version__ = "0.1.0"
