"""
Database engine and session setup.
"""
