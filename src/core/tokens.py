# -----------------------------------------------------------------------------
# WEBHOOK SECRETS
# -----------------------------------------------------------------------------
# Every build trigger that accepts webhook calls gets its own shared secret.
# Secrets are lowercase hex strings of a fixed length, drawn from the OS
# CSPRNG.
# -----------------------------------------------------------------------------

import secrets

SECRET_LENGTH = 16


def generate_secret(length: int = SECRET_LENGTH) -> str:
    """Return a fresh hex token of `length` characters."""
    return secrets.token_hex((length + 1) // 2)[:length]
