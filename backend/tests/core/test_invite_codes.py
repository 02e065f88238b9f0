"""Invite Codes — shape, normalization and distinctness."""

import re

from votecerto.core.invite_codes import generate_invite_code, normalize_invite_code

GENERATED_CODE = re.compile(r"^[0-9A-F]{8}$")


def test_generated_code_is_eight_uppercase_hex():
    code = generate_invite_code()
    assert GENERATED_CODE.match(code)


def test_many_codes_are_distinct():
    codes = {generate_invite_code() for _ in range(500)}
    assert len(codes) == 500


def test_normalize_strips_and_uppercases():
    assert normalize_invite_code("  a1b2c3d4 \n") == "A1B2C3D4"
