"""
AgriInfo: identify fruits and vegetables from a photo and explain how to grow them.
"""

__version__ = "1.0.0"
