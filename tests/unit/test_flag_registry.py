"""Tests for flag definitions, override chains and the registry."""

import pytest

from flagkit import FlagDefinition, FlagRegistry, OverrideChain, UnknownFlagError
from flagkit.flag_registry import count_required_arguments


class TestCountRequiredArguments:
    """Test arity detection used for the persistence gate and serialization."""

    def test_invocation_only(self):
        assert count_required_arguments(lambda inv: True) == 0

    def test_required_positional(self):
        assert count_required_arguments(lambda inv, value: True) == 1
        assert count_required_arguments(lambda inv, a, b: True) == 2

    def test_optional_arguments_are_not_required(self):
        assert count_required_arguments(lambda inv, value=None: True) == 0
        assert count_required_arguments(lambda inv, *values: True) == 0

    def test_var_positional_only_is_accepted(self):
        assert count_required_arguments(lambda *args: True) == 0

    def test_callable_without_invocation_raises(self):
        with pytest.raises(TypeError, match="invocation"):
            count_required_arguments(lambda: True)


class TestFlagDefinition:
    """Test FlagDefinition construction."""

    def test_constant_default(self):
        definition = FlagDefinition.build("beta", True, origin="Shared")
        assert definition.static
        assert definition.computation(None) is True
        assert not definition.requires_arguments

    def test_computation(self):
        definition = FlagDefinition.build("beta", computation=lambda inv, value: value)
        assert not definition.static
        assert definition.requires_arguments

    def test_non_callable_computation_raises(self):
        with pytest.raises(TypeError, match="must be callable"):
            FlagDefinition.build("beta", computation="nope")

    def test_callable_default_raises(self):
        with pytest.raises(TypeError, match="computation="):
            FlagDefinition.build("beta", lambda invocation: False)


class TestFlagRegistry:
    """Test FlagRegistry functionality."""

    def test_declare_defaults_to_false(self):
        registry = FlagRegistry("Shared")
        registry.declare("beta")

        chain = registry.chain_for("beta")
        assert len(chain) == 1
        assert chain.head.computation(None) is False

    def test_names_keep_declaration_order(self):
        registry = FlagRegistry("Shared")
        for name in ("c", "a", "b"):
            registry.declare(name)
        registry.declare("a", True)

        assert registry.names() == ("c", "a", "b")

    def test_redeclaring_pushes_new_head(self):
        registry = FlagRegistry("Shared")
        first = registry.declare("beta", True)
        second = registry.declare("beta", False)

        chain = registry.chain_for("beta")
        assert chain.links == (second, first)
        assert chain.head is second

    def test_unknown_flag_raises(self):
        registry = FlagRegistry("Shared")
        with pytest.raises(UnknownFlagError, match="Unknown flag 'missing' on scope 'Shared'"):
            registry.chain_for("missing")

    def test_unknown_flag_error_is_attribute_error(self):
        registry = FlagRegistry()
        with pytest.raises(AttributeError):
            registry.chain_for("missing")

    def test_invalid_names_raise(self):
        registry = FlagRegistry()
        with pytest.raises(ValueError, match="non-empty string"):
            registry.declare("")
        with pytest.raises(ValueError, match="non-empty string"):
            registry.declare(None)

    def test_callable_default_is_rejected(self):
        registry = FlagRegistry()
        with pytest.raises(TypeError, match="computation="):
            registry.declare("beta", lambda inv: False)
        assert "beta" not in registry

    def test_default_and_computation_are_exclusive(self):
        registry = FlagRegistry()
        with pytest.raises(ValueError, match="either a default or a computation"):
            registry.declare("beta", True, lambda inv: True)

    def test_copy_is_a_snapshot(self):
        registry = FlagRegistry("Parent")
        registry.declare("beta", True)

        clone = registry.copy("Child")
        registry.declare("beta", False)
        registry.declare("gamma", True)

        assert clone.names() == ("beta",)
        assert len(clone.chain_for("beta")) == 1
        assert clone.scope_name == "Child"

    def test_append_chain_places_links_after_own(self):
        target = FlagRegistry("Target")
        source = FlagRegistry("Source")
        own = target.declare("beta", False)
        inherited = source.declare("beta", True)

        target.append_chain("beta", source.chain_for("beta"))

        assert target.chain_for("beta").links == (own, inherited)

    def test_append_chain_skips_links_already_present(self):
        target = FlagRegistry("Target")
        source = FlagRegistry("Source")
        source.declare("beta", True)

        target.append_chain("beta", source.chain_for("beta"))
        target.append_chain("beta", source.chain_for("beta"))

        assert len(target.chain_for("beta")) == 1

    def test_append_chain_moves_held_links_behind_new_head(self):
        target = FlagRegistry("Target")
        source = FlagRegistry("Source")
        own = target.declare("beta", False)
        old = source.declare("beta", False)
        target.append_chain("beta", source.chain_for("beta"))
        new = source.declare("beta", True)

        target.append_chain("beta", source.chain_for("beta"))

        assert target.chain_for("beta").links == (own, new, old)

    def test_describe_lists_origins_head_first(self):
        target = FlagRegistry("Target")
        source = FlagRegistry("Source")
        source.declare("beta", True)
        target.append_chain("beta", source.chain_for("beta"))
        target.declare("beta", False)

        assert target.describe() == {"beta": ["Target", "Source"]}

    def test_contains_and_len(self):
        registry = FlagRegistry()
        registry.declare("beta")
        assert "beta" in registry
        assert "gamma" not in registry
        assert len(registry) == 1


class TestOverrideChain:
    """Test OverrideChain immutability helpers."""

    def test_push_returns_new_chain(self):
        first = FlagDefinition.build("beta", True)
        chain = OverrideChain("beta", (first,))
        second = FlagDefinition.build("beta", False)

        pushed = chain.push(second)

        assert chain.links == (first,)
        assert pushed.links == (second, first)
        assert list(pushed) == [second, first]
