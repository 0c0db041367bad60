"""
One-time code and reset token generation.
"""
import secrets

CODE_MIN = 1000
CODE_MAX = 9999

MIN_TOKEN_BYTES = 20


def generate_code() -> str:
    """
    Generate a 4-digit numeric one-time code.

    Drawn uniformly from 1000..9999 with fresh OS entropy on every call.
    """
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def generate_token(nbytes: int = MIN_TOKEN_BYTES) -> str:
    """
    Generate a hex-encoded reset token.

    Args:
        nbytes: Number of random bytes (at least 20, i.e. 160 bits)

    Returns:
        Hex string of length 2 * nbytes
    """
    return secrets.token_hex(max(nbytes, MIN_TOKEN_BYTES))
