"""
AuthVault - credential lifecycle and password recovery service.
"""

__version__ = "0.1.0"
