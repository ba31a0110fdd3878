from .base import Base, Money

__all__ = ["Base", "Money"]
