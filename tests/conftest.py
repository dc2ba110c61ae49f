"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fileio.backends.base import BaseFileIO
from fileio.loader import BackendLoader
from fileio.schemes import FALLBACK_BACKEND, S3_BACKEND


class FakeInputFile:
    """Input handle that only remembers where it points."""

    def __init__(self, location, io):
        self._location = location
        self.io = io

    def location(self):
        return self._location


class FakeOutputFile(FakeInputFile):
    """Output handle that only remembers where it points."""


class FakeFileIO(BaseFileIO):
    """In-memory backend recording every call made to it."""

    def __init__(self, name="fake", close_error=None):
        self.name = name
        self.close_error = close_error
        self.properties = None
        self.close_calls = 0
        self.deleted = []

    def initialize(self, properties):
        self.properties = dict(properties)

    def new_input_file(self, location):
        return FakeInputFile(location, self)

    def new_output_file(self, location):
        return FakeOutputFile(location, self)

    def delete_file(self, location):
        self.deleted.append(location)

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


class ConfigurableFakeFileIO(FakeFileIO):
    """Fake backend that also accepts the shared configuration."""

    def __init__(self, name="configurable"):
        super().__init__(name)
        self.configuration = None

    def get_configuration(self):
        return self.configuration

    def set_configuration(self, configuration):
        self.configuration = configuration

    def with_configuration_transform(self, transform):
        self.configuration = transform(self.configuration)()


@pytest.fixture
def fake_io_class():
    """The recording fake backend class."""
    return FakeFileIO


@pytest.fixture
def configurable_io_class():
    """The configurable fake backend class."""
    return ConfigurableFakeFileIO


@pytest.fixture
def loader():
    """A loader with fake 'hadoop' and 's3' backends registered."""
    backend_loader = BackendLoader()
    backend_loader.register(FALLBACK_BACKEND, lambda: FakeFileIO(FALLBACK_BACKEND))
    backend_loader.register(S3_BACKEND, lambda: FakeFileIO(S3_BACKEND))
    return backend_loader


@pytest.fixture
def empty_loader():
    """A loader with nothing registered."""
    return BackendLoader()


@pytest.fixture
def sample_properties():
    """Sample catalog properties."""
    return {"warehouse": "s3://bucket/warehouse", "s3.region": "us-east-1"}
