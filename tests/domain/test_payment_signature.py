"""Unit tests for gateway signature verification."""

import hashlib
import hmac

import pytest

from storefront.domain.service.payment_signature import PaymentSignatureVerifier


class TestPaymentSignatureVerifier:

    def test_sign_is_hmac_sha256_of_joined_ids(self):
        expected = hmac.new(b"s3cret", b"order_1|pay_1", hashlib.sha256).hexdigest()
        assert PaymentSignatureVerifier("s3cret").sign("order_1", "pay_1") == expected

    def test_verify_accepts_matching_signature(self):
        verifier = PaymentSignatureVerifier("s3cret")
        assert verifier.verify("order_1", "pay_1", verifier.sign("order_1", "pay_1"))

    def test_verify_rejects_tampered_signature(self):
        verifier = PaymentSignatureVerifier("s3cret")
        assert not verifier.verify("order_1", "pay_1", "0" * 64)

    def test_verify_rejects_signature_for_other_payment(self):
        verifier = PaymentSignatureVerifier("s3cret")
        assert not verifier.verify("order_1", "pay_2", verifier.sign("order_1", "pay_1"))

    def test_verify_rejects_empty_signature(self):
        assert not PaymentSignatureVerifier("s3cret").verify("order_1", "pay_1", "")

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError, match="not configured"):
            PaymentSignatureVerifier("")
