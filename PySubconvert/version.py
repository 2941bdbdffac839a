__version__ = "v1.9.3"
