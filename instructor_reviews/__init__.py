"""
Instructor reviews and moderation API.
"""
__version__ = "0.1.0"
