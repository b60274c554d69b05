"""Tests for the SID naming helpers."""

from gatekeep import sid


def test_constants():
    assert sid.anonymous_sid() == "anonymous"
    assert sid.authenticated_sid() == "authenticated"
    assert sid.root_sid() == "root"


def test_prefixed_sids():
    assert sid.user_sid(42) == "user:42"
    assert sid.role_sid("admin") == "role:admin"
    assert sid.organization_sid("acme") == "org:acme"
