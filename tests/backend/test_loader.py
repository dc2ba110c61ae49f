"""
Tests for the backend loader.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fileio.exceptions import BackendLoadError
from fileio.loader import BackendLoader, default_loader, register_backend


class TestBackendLoader:
    """Tests for BackendLoader."""

    def test_load_registered_backend(self, loader, sample_properties):
        """Test loading builds the backend and initializes it."""
        io = loader.load("s3", sample_properties)

        assert io.name == "s3"
        assert io.properties == sample_properties

    def test_each_load_creates_new_instance(self, loader):
        """Test the loader does not cache instances itself."""
        assert loader.load("hadoop", {}) is not loader.load("hadoop", {})

    def test_unregistered_identifier(self, empty_loader):
        """Test loading an unknown identifier raises BackendLoadError."""
        with pytest.raises(BackendLoadError) as exc_info:
            empty_loader.load("s3", {})

        assert exc_info.value.identifier == "s3"
        assert exc_info.value.secondary is None

    def test_factory_failure_is_chained(self, empty_loader):
        """Test a failing factory is reported with its cause."""

        def broken():
            raise ImportError("no module named 'boto3'")

        empty_loader.register("s3", broken)

        with pytest.raises(BackendLoadError) as exc_info:
            empty_loader.load("s3", {})

        assert isinstance(exc_info.value.__cause__, ImportError)
        assert "boto3" in str(exc_info.value)

    def test_rejects_non_fileio(self, empty_loader):
        """Test a factory returning something else is a load error."""
        empty_loader.register("s3", lambda: object())

        with pytest.raises(BackendLoadError, match="does not implement FileIO"):
            empty_loader.load("s3", {})

    def test_initialize_error_propagates_unchanged(self, empty_loader, fake_io_class):
        """Test errors raised by initialize are not turned into load errors."""

        built = []

        class Failing(fake_io_class):
            def initialize(self, properties):
                built.append(self)
                raise ValueError("bad property")

        empty_loader.register("hadoop", Failing)

        with pytest.raises(ValueError, match="bad property"):
            empty_loader.load("hadoop", {})

        # the half-built backend is released
        assert built[0].close_calls == 1

    def test_set_configuration_error_closes_backend(
        self, empty_loader, configurable_io_class
    ):
        """Test a backend rejecting the configuration is closed before the error propagates."""
        built = []

        class Rejecting(configurable_io_class):
            def set_configuration(self, configuration):
                built.append(self)
                raise TypeError("unsupported configuration")

        empty_loader.register("hadoop", Rejecting)

        with pytest.raises(TypeError, match="unsupported configuration"):
            empty_loader.load("hadoop", {}, {"fs.defaultFS": "file:///"})

        assert built[0].close_calls == 1

    def test_configuration_injected_into_configurable(
        self, empty_loader, configurable_io_class
    ):
        """Test Configurable backends receive the shared configuration."""
        empty_loader.register("hadoop", configurable_io_class)
        conf = {"fs.defaultFS": "file:///"}

        io = empty_loader.load("hadoop", {}, conf)

        assert io.configuration is conf

    def test_configuration_skipped_for_plain_backend(self, loader):
        """Test plain backends load without configuration support."""
        io = loader.load("hadoop", {}, {"fs.defaultFS": "file:///"})

        assert not hasattr(io, "configuration")

    def test_none_configuration_not_injected(self, empty_loader, configurable_io_class):
        """Test a missing configuration leaves the backend untouched."""
        empty_loader.register("hadoop", configurable_io_class)

        io = empty_loader.load("hadoop", {}, None)

        assert io.configuration is None

    def test_register_replaces_and_unregister(self, empty_loader, fake_io_class):
        """Test re-registering replaces the factory and unregister removes it."""
        empty_loader.register("s3", lambda: fake_io_class("first"))
        empty_loader.register("s3", lambda: fake_io_class("second"))

        assert empty_loader.load("s3", {}).name == "second"
        assert empty_loader.registered() == ["s3"]
        assert empty_loader.unregister("s3") is True
        assert empty_loader.unregister("s3") is False
        assert empty_loader.registered() == []


class TestRegisterBackend:
    """Tests for the register_backend decorator."""

    def test_registers_on_given_loader(self, fake_io_class):
        """Test the decorator registers and returns the factory."""
        backend_loader = BackendLoader()

        @register_backend("s3", backend_loader)
        def factory():
            return fake_io_class("decorated")

        assert factory().name == "decorated"
        assert backend_loader.load("s3", {}).name == "decorated"

    def test_registers_on_default_loader(self, fake_io_class):
        """Test the decorator falls back to the module-level loader."""

        @register_backend("test-default")
        def factory():
            return fake_io_class("default")

        try:
            assert "test-default" in default_loader.registered()
        finally:
            default_loader.unregister("test-default")
