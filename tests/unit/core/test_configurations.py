"""
Unit tests for dependency configurations and the mod configuration set.
"""

import pytest

from modsync.core.configurations import (
    JAVA_MODULE_ATTRIBUTE,
    MOD,
    PRIVATE_MOD_CLASSPATH,
    SHARED_MOD_CLASSPATH,
    TOP_LEVEL_MODS,
    ConfigurationContainer,
    create_mod_configurations,
    create_runtime_classpath,
)
from modsync.core.errors import DeclarationError
from modsync.core.types import Dependency, UsageView


@pytest.fixture
def container():
    return ConfigurationContainer()


class TestModConfigurations:
    def test_flags(self, container):
        mods = create_mod_configurations(container)

        assert not mods.mod.can_be_resolved
        assert not mods.mod.can_be_consumed
        assert not mods.mod.visible

        assert not mods.top_level.transitive
        assert mods.top_level.usage == UsageView.API

        assert mods.shared_classpath.transitive
        assert mods.shared_classpath.usage == UsageView.API
        assert mods.shared_classpath.visible

        assert mods.private_classpath.transitive
        assert mods.private_classpath.usage == UsageView.RUNTIME

        for config in mods.resolvable():
            assert not config.can_be_consumed

    def test_names_registered(self, container):
        create_mod_configurations(container)
        for name in (MOD, TOP_LEVEL_MODS, SHARED_MOD_CLASSPATH, PRIVATE_MOD_CLASSPATH):
            assert name in container

    def test_declarations_flow_to_every_resolvable_configuration(self, container):
        mods = create_mod_configurations(container)
        a = Dependency.parse("A:1.0")
        mods.mod.add(a)

        for config in mods.resolvable():
            assert config.dependencies == [a]
            assert config.declared == []

    def test_declaration_order_kept_and_duplicates_collapsed(self, container):
        mods = create_mod_configurations(container)
        b, a = Dependency.parse("B:1.0"), Dependency.parse("A:1.0")
        mods.mod.add(b)
        mods.mod.add(a)
        mods.mod.add(b)
        assert mods.shared_classpath.dependencies == [b, a]

    def test_enable_java_modules(self, container):
        mods = create_mod_configurations(container)
        mods.enable_java_modules()
        for config in mods.resolvable():
            assert config.attributes[JAVA_MODULE_ATTRIBUTE] is True
        assert JAVA_MODULE_ATTRIBUTE not in mods.mod.attributes

    def test_runtime_classpath_is_separate(self, container):
        mods = create_mod_configurations(container)
        runtime = create_runtime_classpath(container)
        runtime.add(Dependency.parse("gson:2.10"))
        assert runtime.usage == UsageView.RUNTIME
        assert mods.private_classpath.dependencies == []


class TestFreezing:
    def test_declare_after_freeze_rejected(self, container):
        mods = create_mod_configurations(container)
        container.freeze()
        with pytest.raises(DeclarationError, match="after resolution has started"):
            mods.mod.add(Dependency.parse("A:1.0"))

    def test_attribute_after_freeze_rejected(self, container):
        mods = create_mod_configurations(container)
        container.freeze()
        with pytest.raises(DeclarationError):
            mods.enable_java_modules()

    def test_create_after_freeze_rejected(self, container):
        container.freeze()
        with pytest.raises(DeclarationError):
            container.create("late")

    def test_freeze_is_idempotent(self, container):
        create_mod_configurations(container)
        container.freeze()
        container.freeze()
        assert container.frozen


class TestContainer:
    def test_duplicate_name(self, container):
        container.create("x")
        with pytest.raises(DeclarationError, match="already exists"):
            container.create("x")

    def test_unknown_name(self, container):
        with pytest.raises(DeclarationError, match="Unknown configuration"):
            container.get("missing")

    def test_extension_cycle_rejected(self, container):
        a = container.create("a")
        b = container.create("b")
        b.extend(a)
        with pytest.raises(DeclarationError, match="cycle"):
            a.extend(b)

    def test_inherited_through_chain(self, container):
        a = container.create("a")
        b = container.create("b")
        c = container.create("c")
        b.extend(a)
        c.extend(b)
        dep = Dependency.parse("libX:1.0")
        a.add(dep)
        assert c.dependencies == [dep]
        assert [cfg.name for cfg in c.hierarchy()] == ["c", "b", "a"]
