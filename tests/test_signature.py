import hashlib
import hmac

import pytest

from hubspot_sync.exceptions import InvalidSignature, MissingSignature, SecretNotConfigured
from hubspot_sync.services.signature import check_request_signature, compute_signature, verify_signature

BODY = b'[{"eventId":1,"subscriptionType":"contact.propertyChange","objectId":512}]'
SECRET = "s3cret"


def test_compute_signature_is_hex_hmac_sha256():
    expected = hmac.new(SECRET.encode(), BODY, hashlib.sha256).hexdigest()
    assert compute_signature(BODY, SECRET) == expected


def test_verify_accepts_matching_signature():
    assert verify_signature(BODY, compute_signature(BODY, SECRET), SECRET) is True


def test_verify_accepts_str_body():
    body = BODY.decode()
    assert verify_signature(body, compute_signature(body, SECRET), SECRET) is True


@pytest.mark.parametrize("index", [0, 7, len(BODY) // 2, len(BODY) - 1])
def test_single_byte_body_mutation_fails(index):
    signature = compute_signature(BODY, SECRET)
    mutated = bytearray(BODY)
    mutated[index] ^= 0x01
    assert verify_signature(bytes(mutated), signature, SECRET) is False


@pytest.mark.parametrize("index", [0, 31, 63])
def test_single_char_signature_mutation_fails(index):
    signature = compute_signature(BODY, SECRET)
    swapped = "0" if signature[index] != "0" else "1"
    mutated = signature[:index] + swapped + signature[index + 1:]
    assert verify_signature(BODY, mutated, SECRET) is False


def test_wrong_secret_fails():
    assert verify_signature(BODY, compute_signature(BODY, SECRET), "other") is False


def test_truncated_or_non_ascii_signature_returns_false():
    signature = compute_signature(BODY, SECRET)
    assert verify_signature(BODY, signature[:-2], SECRET) is False
    assert verify_signature(BODY, signature[:-1] + "é", SECRET) is False


def test_reserialized_body_does_not_verify():
    signature = compute_signature(BODY, SECRET)
    spaced = BODY.replace(b",", b", ")
    assert verify_signature(spaced, signature, SECRET) is False


class TestCheckRequestSignature:
    def test_missing_header_checked_first(self):
        with pytest.raises(MissingSignature) as exc:
            check_request_signature(BODY, None, None)
        assert exc.value.status_code == 401

    def test_missing_secret_is_server_error(self):
        with pytest.raises(SecretNotConfigured) as exc:
            check_request_signature(BODY, "abc", "")
        assert exc.value.status_code == 500

    def test_bad_signature(self):
        with pytest.raises(InvalidSignature) as exc:
            check_request_signature(BODY, "deadbeef", SECRET)
        assert exc.value.status_code == 401

    def test_good_signature_passes(self):
        assert check_request_signature(BODY, compute_signature(BODY, SECRET), SECRET) is None
