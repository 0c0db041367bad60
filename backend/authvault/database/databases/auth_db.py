"""
Auth database configuration.
Stores user identity, credential and recovery data.
"""


class Collections:
    """Collection names in auth_db."""
    USERS = "users"
