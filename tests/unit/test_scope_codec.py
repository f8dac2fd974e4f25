"""Unit tests for the scope string codec."""

import pytest

from scopeguard.domain.entities import PermissionSet, Rule
from scopeguard.domain.exceptions import InvalidScope
from scopeguard.domain.scope_codec import marshal_scope, unmarshal_scope
from scopeguard.domain.value_objects import VerbSet

from tests.conftest import rule


class TestDecode:
    def test_full_token(self) -> None:
        permissions = unmarshal_scope("io.cozy.contacts:GET,POST:123,456:group")
        assert len(permissions) == 1
        (r,) = permissions
        assert r.type == "io.cozy.contacts"
        assert r.verbs == VerbSet.of("GET", "POST")
        assert r.values == ("123", "456")
        assert r.selector == "group"

    def test_empty_string_is_empty_set(self) -> None:
        assert len(unmarshal_scope("")) == 0
        assert len(unmarshal_scope("   ")) == 0

    def test_several_tokens(self) -> None:
        permissions = unmarshal_scope("io.cozy.files:ALL io.cozy.contacts:GET:abc")
        assert list(permissions) == [
            rule("io.cozy.files", "ALL"),
            rule("io.cozy.contacts", "GET", ("abc",)),
        ]

    def test_extra_whitespace_between_tokens(self) -> None:
        assert len(unmarshal_scope(" io.cozy.files:GET \t io.cozy.notes:POST\n")) == 2

    def test_all_mixed_with_verbs_is_wildcard(self) -> None:
        (r,) = unmarshal_scope("io.cozy.files:GET,ALL")
        assert r.verbs == VerbSet.all()

    @pytest.mark.parametrize(
        ("token", "reason"),
        [
            (":GET", "missing type"),
            ("io.cozy.files", "missing verbs"),
            ("io.cozy.files:", "missing verbs"),
            ("io.cozy.files:GET,FETCH", "unknown verb 'FETCH'"),
            ("io.cozy.files:get", "unknown verb 'get'"),
            ("io.cozy.files:GET,", "unknown verb ''"),
            ("io.cozy.files:GET::dir_id", "selector without values"),
            ("io.cozy.files:GET:", "empty values"),
            ("io.cozy.files:GET:a,,b", "empty value"),
            ("io.cozy.files:GET:a:", "empty selector"),
            ("io.cozy.files:GET:a:b:c", "too many"),
        ],
    )
    def test_malformed_token(self, token: str, reason: str) -> None:
        with pytest.raises(InvalidScope, match=reason) as exc_info:
            unmarshal_scope(f"io.cozy.notes:GET {token}")
        assert exc_info.value.token == token


class TestEncode:
    def test_encode_full_rule(self) -> None:
        permissions = PermissionSet([rule("io.cozy.contacts", ("POST", "GET"), ("123", "456"), "group")])
        assert marshal_scope(permissions) == "io.cozy.contacts:GET,POST:123,456:group"

    def test_encode_several_rules(self) -> None:
        permissions = PermissionSet([rule("io.cozy.files", "ALL"), rule("io.cozy.notes", "GET", ("n1",))])
        assert permissions.to_scope() == "io.cozy.files:ALL io.cozy.notes:GET:n1"

    def test_encode_empty(self) -> None:
        assert marshal_scope(PermissionSet()) == ""

    def test_description_is_not_encoded(self) -> None:
        r = Rule(type="io.cozy.files", verbs=VerbSet.of("GET"), description="read your files")
        assert PermissionSet([r]).to_scope() == "io.cozy.files:GET"

    @pytest.mark.parametrize(
        "bad_rule",
        [
            rule("io.cozy:files"),
            rule("io.cozy files"),
            rule(values=("a,b",)),
            rule(values=("a:b",)),
            rule(values=("a b",)),
            rule(values=("a",), selector="dir:id"),
        ],
    )
    def test_unencodable_rule(self, bad_rule: Rule) -> None:
        with pytest.raises(InvalidScope):
            marshal_scope(PermissionSet([bad_rule]))


@pytest.mark.parametrize(
    "permissions",
    [
        PermissionSet(),
        PermissionSet([rule("io.cozy.files", "ALL")]),
        PermissionSet(
            [
                rule("io.cozy.contacts", ("DELETE", "GET"), ("g1", "g2"), "groups"),
                rule("io.cozy.files", ("PUT", "PATCH"), ("doc1",)),
                rule("io.cozy.files", "POST"),
            ]
        ),
    ],
)
def test_decode_of_encode_is_equivalent(permissions: PermissionSet) -> None:
    decoded = PermissionSet.from_scope(permissions.to_scope())
    assert decoded.is_equivalent_to(permissions)


def test_encoding_is_stable() -> None:
    scope = "io.cozy.files:GET,POST,PUT,PATCH,DELETE io.cozy.contacts:ALL:c1:group"
    assert unmarshal_scope(scope).to_scope() == scope
