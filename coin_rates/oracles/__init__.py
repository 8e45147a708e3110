"""Price oracle modules."""
from .client import OracleClient

__all__ = ["OracleClient"]
