"""Unit tests for Identity and the session payload it is read from."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.identity import Identity


class TestMayPurchase:

    def test_verified_customer(self):
        assert Identity("u1", email_verified=True).may_purchase

    def test_unverified_customer(self):
        assert not Identity("u1").may_purchase

    def test_admin_bypasses_verification(self):
        assert Identity("root", is_admin=True).may_purchase


class TestFromPayload:

    def test_session_shape(self):
        identity = Identity.from_payload({"userId": "u1", "emailVerified": True, "isAdmin": False})
        assert identity == Identity("u1", email_verified=True)

    def test_flags_default_to_false(self):
        assert Identity.from_payload({"userId": "u1"}) == Identity("u1")

    @pytest.mark.parametrize("payload", [None, {}, {"userId": ""}, {"userId": None}])
    def test_no_session(self, payload):
        assert Identity.from_payload(payload) is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"userId": "u1", "emailVerified": "false"},
            {"userId": "u1", "emailVerified": 1},
            {"userId": "u1", "isAdmin": "true"},
        ],
    )
    def test_flags_must_be_real_booleans(self, payload):
        with pytest.raises(ValidationError, match="true or false"):
            Identity.from_payload(payload)

    def test_user_id_must_be_a_string(self):
        with pytest.raises(ValidationError, match="userId"):
            Identity.from_payload({"userId": 42})

    def test_non_object_rejected(self):
        with pytest.raises(ValidationError, match="must be an object"):
            Identity.from_payload(["u1"])
