"""Tests for the exception hierarchy."""

from __future__ import annotations

from combat_tracker.core.exceptions import (
    CombatTrackerError,
    ConfigurationError,
    NotFoundError,
    StorageFault,
    ValidationError,
)


class TestCombatTrackerError:
    """Tests for the base CombatTrackerError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = CombatTrackerError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = CombatTrackerError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(CombatTrackerError("Test", details={"x": 1}))
        assert "CombatTrackerError" in repr_str
        assert "Test" in repr_str


class TestValidationError:
    """Tests for ValidationError."""

    def test_field_context(self) -> None:
        """The offending field and value are recorded."""
        exc = ValidationError("Out of range", field_name="initiative", invalid_value=31)
        assert exc.field_name == "initiative"
        assert exc.details["field_name"] == "initiative"
        assert exc.details["invalid_value"] == 31

    def test_without_field(self) -> None:
        """Model-level failures carry no field."""
        exc = ValidationError("No fields to update")
        assert exc.field_name is None
        assert "field_name" not in exc.details


class TestStorageExceptions:
    """Tests for NotFoundError and StorageFault."""

    def test_not_found_context(self) -> None:
        """Test NotFoundError records resource and id."""
        exc = NotFoundError("Combatant not found", resource="combatant", resource_id=0)
        assert exc.resource_id == 0
        assert exc.details == {"resource": "combatant", "resource_id": 0}

    def test_storage_fault_operation(self) -> None:
        """Test StorageFault records the failed operation."""
        exc = StorageFault("disk I/O error", operation="create_combatant")
        assert exc.details["operation"] == "create_combatant"

    def test_inheritance(self) -> None:
        """Every domain error shares the base class."""
        for exc in (
            ConfigurationError("x", config_key="backend"),
            ValidationError("x"),
            NotFoundError("x"),
            StorageFault("x"),
        ):
            assert isinstance(exc, CombatTrackerError)
            assert isinstance(exc, Exception)

    def test_to_dict(self) -> None:
        """The payload names the concrete error type."""
        exc = NotFoundError("Combatant not found", resource="combatant", resource_id=3)

        assert exc.to_dict() == {
            "error": "NotFoundError",
            "message": "Combatant not found",
            "details": {"resource": "combatant", "resource_id": 3},
        }
