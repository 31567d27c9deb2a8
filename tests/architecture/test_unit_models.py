"""Tests for architecture models."""

import pytest

from polymetrics.architecture.models import (
    HealthSummary,
    UnitKind,
    UnitMetrics,
    is_abstract_module,
)
from polymetrics.conventions import is_interface_name


class TestUnitKind:
    def test_only_plain_directories_skip_interface_detection(self):
        assert [k for k in UnitKind if not k.detects_interfaces] == [UnitKind.DIRECTORY]

    def test_bases_are_the_external_consumers(self):
        assert [k for k in UnitKind if k.is_external_consumer] == [UnitKind.BASE]

    def test_reportable_kinds(self):
        assert {k for k in UnitKind if k.is_reportable} == {UnitKind.COMPONENT, UnitKind.PACKAGE}


class TestIsAbstractModule:
    @pytest.mark.parametrize(
        "name,kind,is_package,expected",
        [
            ("acme.user.interface", UnitKind.COMPONENT, False, True),
            ("acme.user.interface.admin", UnitKind.COMPONENT, False, True),
            ("acme.user.core", UnitKind.COMPONENT, False, False),
            ("shop.cart", UnitKind.COMPONENT, True, True),
            ("acme.contracts.user", UnitKind.INTERFACE_GROUP, False, True),
            ("app.user.interface", UnitKind.DIRECTORY, False, False),
            ("app.user", UnitKind.DIRECTORY, True, False),
        ],
    )
    def test_classification(self, name, kind, is_package, expected):
        assert is_abstract_module(name, kind, is_package) is expected


class TestUnitMetrics:
    def test_has_distance(self):
        assert UnitMetrics(name="a", kind=UnitKind.COMPONENT, abstractness=1.0, distance=0.0).has_distance
        assert not UnitMetrics(name="api", kind=UnitKind.BASE, is_entry_point=True).has_distance


class TestSerialization:
    def test_undefined_metrics_serialize_as_none(self):
        data = UnitMetrics(name="api", kind=UnitKind.BASE, is_entry_point=True).to_dict()
        assert data["kind"] == "base"
        assert data["abstractness"] is None
        assert data["distance"] is None

    def test_health_to_dict(self):
        data = HealthSummary(unit_count=2, measured_count=2, mean_distance=0.25).to_dict()
        assert data["unit_count"] == 2
        assert data["mean_distance"] == 0.25
        assert data["healthy"] is True


class TestIsInterfaceName:
    def test_interface_segment(self):
        assert is_interface_name("myapp.user.interface")
        assert is_interface_name("myapp.user.interface.admin")

    def test_similar_names_are_not_interfaces(self):
        assert not is_interface_name("myapp.user.interfaces")
        assert not is_interface_name("interface.user")
        assert not is_interface_name("myapp.user.core")
