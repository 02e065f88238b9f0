"""Invite Codes — generation and normalization of community join codes.

Invariants:
    - Generated codes are exactly 8 uppercase hexadecimal characters (4 random bytes)
    - Submitted codes are compared after strip + upper
    - Uniqueness is NOT decided here: the caller retries against the store and the
      unique constraint on comunidades.codigo is the final arbiter

Design Decisions:
    - secrets over random: codes grant membership, so they come from the OS CSPRNG
    - No retry cap: keyspace is 2^32 and community counts are small
"""

import secrets

CODE_BYTES = 4
MIN_CODE_LENGTH = 6


def generate_invite_code() -> str:
    return secrets.token_hex(CODE_BYTES).upper()


def normalize_invite_code(raw: str) -> str:
    return raw.strip().upper()
