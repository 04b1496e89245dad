"""
Tests for SecretStore.

Tests cover:
- get/set semantics (miss is not an error)
- Serialize/deserialize round-trip and malformed input
- Deserialize leaves the store unchanged on error
- Erase ordering, buffer zeroing and idempotence
- Context manager erasure on every exit path
"""
import orjson
import pytest

from wallet_crypto import (
    DeserializationError,
    SecretStore,
    SerializationError,
    SECRET_SEED,
    SECRET_LAST_SEED,
)


@pytest.fixture
def store_with_data():
    """Create a SecretStore with wallet seeds."""
    with SecretStore({SECRET_SEED: "abc123", SECRET_LAST_SEED: "def456"}) as secrets:
        yield secrets


class TestGetSet:
    """Tests for get and set."""

    def test_empty_store(self, store):
        """Test a new store is empty."""
        assert store.empty is True
        assert len(store) == 0
        assert store.keys() == []

    def test_get_missing(self, store):
        """Test a miss returns ("", False) without raising."""
        assert store.get("seed") == ("", False)

    def test_set_and_get(self, store):
        """Test stored values are returned with found=True."""
        store.set("seed", "abc123")
        assert store.get("seed") == ("abc123", True)
        assert "seed" in store
        assert store.empty is False

    def test_overwrite(self, store):
        """Test set overwrites the previous value and zeroes its buffer."""
        store.set("seed", "first")
        old = store._secrets["seed"]
        store.set("seed", "second")
        assert store.get("seed") == ("second", True)
        assert bytes(old) == b"\x00" * len("first")
        assert len(store) == 1

    def test_empty_value_is_found(self, store):
        """Test an empty value is distinct from a missing key."""
        store.set("seed", "")
        assert store.get("seed") == ("", True)

    def test_unicode_values(self, store):
        """Test non-ASCII names and values."""
        store.set("semilla", "ñandú 🦤")
        assert store.get("semilla") == ("ñandú 🦤", True)

    def test_initial_mapping(self, store_with_data):
        """Test a store can be created from a mapping."""
        assert store_with_data.get(SECRET_SEED) == ("abc123", True)
        assert store_with_data.get(SECRET_LAST_SEED) == ("def456", True)
        assert sorted(store_with_data) == [SECRET_LAST_SEED, SECRET_SEED]

    def test_repr_hides_values(self, store_with_data):
        """Test repr shows names only."""
        text = repr(store_with_data)
        assert "seed" in text
        assert "abc123" not in text
        assert "def456" not in text


class TestSerialization:
    """Tests for serialize and deserialize."""

    def test_serialize_is_json_object(self, store_with_data):
        """Test the encoding is a JSON object of names to values."""
        assert orjson.loads(store_with_data.serialize()) == {
            SECRET_SEED: "abc123",
            SECRET_LAST_SEED: "def456",
        }

    def test_roundtrip(self, store_with_data):
        """Test deserialize(serialize(M)) reproduces M."""
        with SecretStore.from_bytes(store_with_data.serialize()) as restored:
            assert sorted(restored.keys()) == sorted(store_with_data.keys())
            for key in store_with_data:
                assert restored.get(key) == store_with_data.get(key)

    def test_roundtrip_empty(self, store):
        """Test an empty store round-trips."""
        assert store.serialize() == b"{}"
        assert SecretStore.from_bytes(store.serialize()).empty

    def test_deserialize_merges(self, store):
        """Test deserialize adds to and overwrites existing secrets."""
        store.set("seed", "old")
        store.set("other", "kept")
        store.deserialize(b'{"seed": "new", "lastSeed": "x"}')
        assert store.get("seed") == ("new", True)
        assert store.get("other") == ("kept", True)
        assert store.get("lastSeed") == ("x", True)

    def test_deserialize_accepts_bytearray(self, store):
        """Test bytearray input is accepted."""
        store.deserialize(bytearray(b'{"seed": "abc"}'))
        assert store.get("seed") == ("abc", True)

    @pytest.mark.parametrize("data", [
        b"",
        b"not json",
        b'{"seed": "abc"',
        b"[]",
        b'"seed"',
        b"null",
        b'{"seed": 1}',
        b'{"seed": null}',
        b'{"seed": "ok", "other": ["x"]}',
        b"\xff\xfe",
    ])
    def test_deserialize_malformed(self, store, data):
        """Test malformed input raises DeserializationError."""
        with pytest.raises(DeserializationError):
            store.deserialize(data)

    def test_deserialize_error_leaves_store_unchanged(self, store):
        """Test a payload with one bad value applies nothing."""
        store.set("seed", "original")
        with pytest.raises(DeserializationError):
            store.deserialize(b'{"seed": "replaced", "lastSeed": 7}')
        assert store.get("seed") == ("original", True)
        assert "lastSeed" not in store
        assert len(store) == 1

    def test_deserialization_error_chains_cause(self, store):
        """Test the decoder error is kept as the cause."""
        with pytest.raises(DeserializationError) as exc:
            store.deserialize(b"not json")
        assert isinstance(exc.value.__cause__, orjson.JSONDecodeError)

    def test_serialization_error_is_reported(self, store):
        """Test encoder failures surface as SerializationError."""
        store._secrets["broken"] = bytearray(b"\xff")
        with pytest.raises(SerializationError):
            store.serialize()


class TestErase:
    """Tests for erase."""

    def test_erase_empties_store(self, store_with_data):
        """Test erase removes every key."""
        store_with_data.erase()
        assert store_with_data.empty
        assert store_with_data.get(SECRET_SEED) == ("", False)

    def test_erase_zeroes_buffers(self, store_with_data):
        """Test every value buffer is overwritten before removal."""
        buffers = list(store_with_data._secrets.values())
        store_with_data.erase()
        for buf in buffers:
            assert bytes(buf) == b"\x00" * len(buf)

    def test_value_cleared_before_key_removed(self):
        """Test each value is zeroed while its key is still present."""
        observed = []

        class WatchedDict(dict):
            def __delitem__(self, key):
                observed.append((key, bytes(self[key])))
                super().__delitem__(key)

        store = SecretStore()
        store._secrets = WatchedDict()
        store.set("seed", "abc")
        store.set("lastSeed", "xyz")
        store.erase()
        assert sorted(observed) == [("lastSeed", b"\x00" * 3), ("seed", b"\x00" * 3)]
        assert store.empty

    def test_erase_is_idempotent(self, store_with_data):
        """Test erase can be called repeatedly."""
        store_with_data.erase()
        store_with_data.erase()
        assert store_with_data.empty

    def test_erase_empty_store(self, store):
        """Test erase on an empty store is a no-op."""
        store.erase()
        assert store.empty

    def test_repopulate_after_erase(self, store_with_data):
        """Test an erased store can be used again."""
        store_with_data.erase()
        store_with_data.set("seed", "again")
        assert store_with_data.get("seed") == ("again", True)


class TestContextManager:
    """Tests for scoped erasure."""

    def test_erased_on_exit(self):
        """Test leaving the block erases the store."""
        with SecretStore({"seed": "abc"}) as secrets:
            assert secrets.get("seed") == ("abc", True)
        assert secrets.empty

    def test_erased_on_error(self):
        """Test an exception inside the block still erases the store."""
        with pytest.raises(RuntimeError):
            with SecretStore({"seed": "abc"}) as secrets:
                raise RuntimeError("boom")
        assert secrets.empty
