"""Shared fixtures."""

import pytest

from gatekeep import sid
from gatekeep.config import Settings
from gatekeep.configuration import authorizer as build_authorizer

from tests.blog import Post, User, post_acl


@pytest.fixture
def settings():
    return Settings(explain_denials=True)


@pytest.fixture
def authz(settings):
    """Authorizer with a single 'post' resource type."""
    return build_authorizer(
        lambda config: config.register_resource(
            "post", ["read", "write", "comment", "delete"], post_acl
        ),
        settings=settings,
    )


@pytest.fixture
def post():
    return Post(id="post-1", author_id="u-author")


@pytest.fixture
def root_user():
    return User(id="u-root", sids=[sid.root_sid()])


@pytest.fixture
def reader():
    return User(id="u-42", sids=[sid.authenticated_sid(), sid.user_sid("u-42")])
