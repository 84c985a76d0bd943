"""
test_registry.py — Unit Tests for Named Encrypter Instances
==============================================================
"""

import pytest

from encrypter.core.encryption import Encrypter, generate_key
from encrypter.core.errors import NoInstanceAvailable
from encrypter.registry import EncrypterRegistry


@pytest.fixture
def registry():
    return EncrypterRegistry()


def _encrypter() -> Encrypter:
    return Encrypter(generate_key("AES-256-CBC"), "AES-256-CBC")


class TestRegistry:
    """Tests for registering and looking up encrypters."""

    def test_empty_registry(self, registry):
        """Lookup before registration fails."""
        with pytest.raises(NoInstanceAvailable, match="Unavailable encrypter"):
            registry.get()

    def test_first_registration_is_default(self, registry):
        first = registry.register(_encrypter(), "first")
        registry.register(_encrypter(), "second")
        assert registry.get() is first
        assert registry.get("first") is first

    def test_explicit_default(self, registry):
        registry.register(_encrypter(), "first")
        second = registry.register(_encrypter(), "second", default=True)
        assert registry.get() is second

    def test_unknown_name(self, registry):
        registry.register(_encrypter())
        with pytest.raises(NoInstanceAvailable):
            registry.get("archive")

    def test_missing_default_names_lookup_key(self, registry):
        """The error names the key actually looked up."""
        registry.register(_encrypter(), "primary")
        registry._instances.clear()
        with pytest.raises(NoInstanceAvailable, match="'primary'"):
            registry.get()

    def test_names_and_has(self, registry):
        registry.register(_encrypter(), "a")
        registry.register(_encrypter(), "b")
        assert registry.names() == ["a", "b"]
        assert registry.has("a")
        assert not registry.has("c")

    def test_clear(self, registry):
        registry.register(_encrypter())
        registry.clear()
        with pytest.raises(NoInstanceAvailable):
            registry.get()

    def test_registries_are_independent(self):
        """No state is shared between registries."""
        one = EncrypterRegistry()
        two = EncrypterRegistry()
        one.register(_encrypter())
        with pytest.raises(NoInstanceAvailable):
            two.get()

    def test_shared_instance_roundtrip(self, registry):
        """Values encrypted via one lookup decrypt via another."""
        registry.register(_encrypter())
        hash = registry.get().encrypt(b"shared state")
        assert registry.get("default").decrypt(hash) == b"shared state"
