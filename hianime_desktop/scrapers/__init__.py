from .hianime.hianime import HianimeScraper

__all__ = ["HianimeScraper"]
