"""Tests for the per-owner Features facade."""

from types import SimpleNamespace

import pytest

from flagkit import (
    FlagError,
    Features,
    InMemoryAdapter,
    OwnerIdentity,
    PersistenceNotAttachedError,
    Scope,
    ScopeKind,
    UnknownFlagError,
)


@pytest.fixture
def scope():
    scope = Scope("Features")
    scope.declare("some_feature", True)
    scope.declare("matches", computation=lambda inv, value: inv.owner.name == value)
    return scope


class TestFeatures:
    """Test Features functionality."""

    def test_check_returns_booleans(self, scope, owner):
        features = Features(scope, owner=owner)
        assert features.check("some_feature") is True
        assert features.check("matches", "foo") is True
        assert features.check("matches", "bar") is False

    def test_attribute_sugar(self, scope, owner):
        features = Features(scope, owner=owner)
        assert features.some_feature() is True
        assert features.matches("foo") is True

    def test_attribute_sugar_unknown_flag(self, scope, owner):
        features = Features(scope, owner=owner)

        with pytest.raises(UnknownFlagError):
            features.missing_feature()
        assert not hasattr(features, "missing_feature")

    def test_resolve_returns_raw_value(self, owner):
        scope = Scope("Features")
        scope.declare("odd", computation=lambda inv: "foo")
        assert Features(scope, owner=owner).resolve("odd") == "foo"

    def test_names_and_contains(self, scope, owner):
        features = Features(scope, owner=owner)
        assert features.names() == ("some_feature", "matches")
        assert "matches" in features
        assert "missing" not in features

    def test_context_is_created_lazily(self, scope, owner):
        features = Features(scope, owner=owner)
        assert features._context is None
        features.check("some_feature")
        assert features._context is not None

    def test_persistence_requires_adapter(self, scope, owner):
        features = Features(scope, owner=owner)

        assert not features.persistent
        with pytest.raises(PersistenceNotAttachedError):
            features.enable("some_feature")

    def test_identity_defaults_to_owner_type_and_id(self, scope):
        class Account:
            id = 5

        features = Features(scope, owner=Account(), adapter=InMemoryAdapter())
        assert features.identity == OwnerIdentity(Account.__qualname__, 5)
        assert str(OwnerIdentity("Account", 5)) == "Account:5"

    def test_identity_requires_id(self, scope):
        features = Features(scope, owner=SimpleNamespace(), adapter=InMemoryAdapter())
        with pytest.raises(FlagError, match="no 'id'"):
            features.identity

    def test_reload_without_cache_is_noop(self, scope, owner):
        Features(scope, owner=owner).reload()

    def test_module_scope_features_are_bound_to_namespace(self):
        scope = Scope("Features", namespace=SimpleNamespace(enabled=True))
        scope.declare("follows_namespace", computation=lambda inv: inv.owner.enabled)

        assert scope.features.follows_namespace() is True
        assert scope.features is scope.features

    def test_instance_scope_has_no_direct_features(self):
        scope = Scope("User", kind=ScopeKind.INSTANCE)
        with pytest.raises(FlagError, match="through an instance"):
            scope.features

    def test_log_current_flags(self, scope, owner, caplog):
        with caplog.at_level("INFO", logger="flagkit.features"):
            Features(scope, owner=owner).log_current_flags()

        assert "some_feature: True" in caplog.text
        assert "matches" not in caplog.text
