"""Scope string codec.

A scope string holds one token per rule, separated by spaces::

    type ":" verbs [ ":" values [ ":" selector ] ]

e.g. ``io.cozy.files:GET io.cozy.contacts:GET,POST:123,456:group``.
Verbs are ``ALL`` or a comma list of GET, POST, PUT, PATCH, DELETE; values
are comma separated. The same string is used as an OAuth scope and inside
sharing codes, so encoding of an existing rule must never change.
"""

import re

from scopeguard.domain.entities.permission_set import PermissionSet
from scopeguard.domain.entities.rule import Rule
from scopeguard.domain.exceptions import InvalidRule, InvalidScope, InvalidVerb
from scopeguard.domain.value_objects import VerbSet

RULE_SEPARATOR = " "
PART_SEPARATOR = ":"
LIST_SEPARATOR = ","

_WHITESPACE = re.compile(r"\s")


def unmarshal_scope(scope: str) -> PermissionSet:
    """Decode a scope string. The empty string is the empty set."""
    return PermissionSet(_decode_token(token) for token in scope.split())


def marshal_scope(permissions: PermissionSet) -> str:
    """Encode a permission set; raises InvalidScope for unencodable rules."""
    return RULE_SEPARATOR.join(_encode_rule(rule) for rule in permissions)


def _decode_token(token: str) -> Rule:
    parts = token.split(PART_SEPARATOR)
    if len(parts) > 4:
        raise InvalidScope(token, "too many ':' separated fields")
    doc_type = parts[0]
    if not doc_type:
        raise InvalidScope(token, "missing type")
    if len(parts) < 2 or not parts[1]:
        raise InvalidScope(token, "missing verbs")

    try:
        verbs = VerbSet.parse(parts[1].split(LIST_SEPARATOR))
    except InvalidVerb as e:
        raise InvalidScope(token, f"unknown verb {e.name!r}") from e

    values: tuple[str, ...] = ()
    if len(parts) >= 3:
        if not parts[2]:
            raise InvalidScope(token, "selector without values" if len(parts) == 4 else "empty values")
        values = tuple(parts[2].split(LIST_SEPARATOR))
        if any(not v for v in values):
            raise InvalidScope(token, "empty value")

    selector = ""
    if len(parts) == 4:
        selector = parts[3]
        if not selector:
            raise InvalidScope(token, "empty selector")

    try:
        return Rule(type=doc_type, verbs=verbs, values=values, selector=selector)
    except InvalidRule as e:
        raise InvalidScope(token, str(e)) from e


def _encode_rule(rule: Rule) -> str:
    token = rule.type + PART_SEPARATOR + str(rule.verbs)
    if PART_SEPARATOR in rule.type or _WHITESPACE.search(rule.type):
        raise InvalidScope(token, "type contains ':' or whitespace")
    if rule.values:
        for value in rule.values:
            if LIST_SEPARATOR in value or PART_SEPARATOR in value or _WHITESPACE.search(value):
                raise InvalidScope(token, f"value {value!r} contains ',', ':' or whitespace")
        token += PART_SEPARATOR + LIST_SEPARATOR.join(rule.values)
    if rule.selector:
        if PART_SEPARATOR in rule.selector or _WHITESPACE.search(rule.selector):
            raise InvalidScope(token, "selector contains ':' or whitespace")
        token += PART_SEPARATOR + rule.selector
    return token
