"""
HiAnime desktop backend
Scraping, caching and local storage behind the desktop shell
"""
__version__ = "1.0.0"
