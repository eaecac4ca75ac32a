from datetime import timedelta

import pytest
from jose import jwt

from trivo.core.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
    verify_token,
)

pytestmark = pytest.mark.unit


def test_password_hash():
    hashed = get_password_hash("Admin123!")
    assert hashed != "Admin123!"
    assert verify_password("Admin123!", hashed)
    assert not verify_password("otra", hashed)


def test_password_vacia_o_hash_invalido():
    assert not verify_password("", get_password_hash("x"))
    assert not verify_password("Admin123!", "no-es-bcrypt")


def test_token_incluye_usuario_y_rol():
    token = create_access_token(subject=42, extra_claims={"rol": "admin"})
    payload = decode_token(token)
    assert payload["sub"] == "42"
    assert payload["rol"] == "admin"
    assert verify_token(token) == 42


def test_token_expirado():
    token = create_access_token(subject=1, expires_delta=timedelta(seconds=-5))
    assert verify_token(token) is None


def test_token_firmado_con_otra_clave():
    token = jwt.encode({"sub": "1"}, "otra-clave", algorithm="HS256")
    assert verify_token(token) is None
    assert verify_token("basura") is None
