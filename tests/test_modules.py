import pytest

from zoho_crm.exceptions import ModuleNotFound
from zoho_crm.modules import DEFAULT_MODULES, ModuleRegistry


def test_default_registry_contains_default_modules():
    registry = ModuleRegistry()
    assert registry.module_names == DEFAULT_MODULES


def test_supports_checks_module_and_method():
    registry = ModuleRegistry(["Leads", "Users"])
    assert registry.supports("Leads", "getRecords")
    assert registry.supports("Leads", "convertLead")
    assert not registry.supports("Users", "getRecords")
    assert not registry.supports("Calls", "getRecords")


def test_unknown_module_fails_at_construction():
    with pytest.raises(ModuleNotFound, match="Potentials"):
        ModuleRegistry(["Leads", "Potentials"])


def test_custom_definitions():
    registry = ModuleRegistry(["Tasks"], definitions={"Tasks": {"methods": ["getRecords"], "stream_name": "tasks"}})
    descriptor = registry.get("Tasks")
    assert descriptor.stream_name == "tasks"
    assert descriptor.supported_methods == frozenset(["getRecords"])
    assert "Tasks" in registry
