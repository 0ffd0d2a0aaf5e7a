"""Option, Result and State containers, with gob and SQL value conversion."""

__version__ = "0.1.0"
__all__ = ["gob", "sqlconvert", "option", "result", "state", "typeclass"]