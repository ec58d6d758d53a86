from .logconfig import setup_logging

__all__ = ["setup_logging"]
