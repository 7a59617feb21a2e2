from .schema import Schema

__all__ = ["Schema"]
