from .token import TokenRecord

__all__ = ["TokenRecord"]
