import hashlib
import hmac

import pytest

from nobsign import BadSignature, Signer, derive_key
from nobsign.encoding import b64encode


def test_sign_known_vector(secret):
    signer = Signer(secret)

    signed = signer.sign("value")

    assert signed == "value.EWkF3-80sipsPgLQ01NuTuPb0jQ"
    assert signer.unsign(signed) == "value"


def test_sign_accepts_bytes_secret(secret):
    assert Signer(secret.encode()).sign("value") == Signer(secret).sign("value")


def test_derive_key_is_hmac_of_salt():
    expected = hmac.new(b"my-key", b"nobi.Signer", hashlib.sha1).digest()
    assert derive_key("my-key") == expected


def test_signature_uses_derived_key_not_secret(secret):
    key = derive_key(secret)
    expected = b64encode(hmac.new(key, b"value", hashlib.sha1).digest())
    naive = b64encode(hmac.new(secret.encode(), b"value", hashlib.sha1).digest())

    assert Signer(secret).get_signature("value") == expected
    assert expected != naive


@pytest.mark.parametrize(
    "value",
    ["value", "", "101", "héllo ✓", "with spaces and / slashes", "a.b.c", "trailing."],
)
def test_round_trip(secret, value):
    signer = Signer(secret)
    assert signer.unsign(signer.sign(value)) == value


def test_embedded_separator_is_preserved(secret):
    signer = Signer(secret)
    signed = signer.sign("user.101.admin")

    assert signed.startswith("user.101.admin.")
    assert signer.unsign(signed) == "user.101.admin"


def test_bad_base64_signature(secret):
    with pytest.raises(BadSignature):
        Signer(secret).unsign("value.ABCDEF")


@pytest.mark.parametrize("token", ["", "value", "value.", "value.EWkF3+80sipsPgLQ01NuTuPb0jQ"])
def test_malformed_tokens(secret, token):
    with pytest.raises(BadSignature):
        Signer(secret).unsign(token)


def test_padded_signature_rejected(secret):
    with pytest.raises(BadSignature):
        Signer(secret).unsign("value.EWkF3-80sipsPgLQ01NuTuPb0jQ=")


def test_every_signature_character_is_checked(secret):
    signer = Signer(secret)
    value, _, sig = signer.sign("value").rpartition(".")

    for i, char in enumerate(sig):
        replacement = "A" if char != "A" else "B"
        tampered = f"{value}.{sig[:i]}{replacement}{sig[i + 1:]}"
        with pytest.raises(BadSignature):
            signer.unsign(tampered)


def test_tampered_value(secret):
    signed = Signer(secret).sign("101")
    with pytest.raises(BadSignature, match="does not match"):
        Signer(secret).unsign("102" + signed[3:])


def test_wrong_secret(secret):
    signed = Signer(secret).sign("value")
    with pytest.raises(BadSignature):
        Signer("another-key").unsign(signed)


def test_salt_separates_keys(secret):
    signed = Signer(secret, salt="activation").sign("value")

    assert Signer(secret, salt="activation").unsign(signed) == "value"
    with pytest.raises(BadSignature):
        Signer(secret).unsign(signed)


def test_sha256_digest_is_not_compatible(secret):
    signer = Signer(secret, digest_method="sha256")
    signed = signer.sign("value")

    assert len(signed.rpartition(".")[2]) == 43
    assert signer.unsign(signed) == "value"
    with pytest.raises(BadSignature):
        Signer(secret).unsign(signed)


def test_unknown_digest_rejected(secret):
    with pytest.raises(ValueError):
        Signer(secret, digest_method="not-a-hash")


def test_validate(secret):
    signer = Signer(secret)
    assert signer.validate("value.EWkF3-80sipsPgLQ01NuTuPb0jQ")
    assert not signer.validate("value.ABCDEF")


def test_signer_is_immutable(secret):
    signer = Signer(secret)
    with pytest.raises(AttributeError):
        signer._key = b"forged"


def test_repr_hides_key_material(secret):
    signer = Signer(secret)
    assert secret not in repr(signer)
    assert "sha1" in repr(signer)
    assert signer.separator == "."


def test_value_with_lone_surrogate_is_rejected(secret):
    with pytest.raises(BadSignature, match="not valid UTF-8"):
        Signer(secret).unsign("\udcff.EWkF3-80sipsPgLQ01NuTuPb0jQ")
    assert not Signer(secret).validate("\udcff.EWkF3-80sipsPgLQ01NuTuPb0jQ")
