"""Tests for the hashing module."""

import hashlib
from pathlib import Path
from unittest.mock import patch

import pytest
import xxhash

from photorenamer.core.hashing import DEFAULT_CHUNK_SIZE, compute_file_hash, create_hasher


class TestCreateHasher:
    """Tests for create_hasher function."""

    @pytest.mark.parametrize("algorithm", ["xxh128", "xxh64", "sha256", "md5"])
    def test_supported_algorithms(self, algorithm):
        hasher = create_hasher(algorithm)
        hasher.update(b"data")

        assert hasher.hexdigest()

    def test_unsupported_algorithm_raises(self):
        with pytest.raises(ValueError, match="Unsupported hash algorithm"):
            create_hasher("crc32")


class TestComputeFileHash:
    """Tests for compute_file_hash function."""

    def test_default_is_xxh128(self, tmp_path):
        """Default hash is the 128-bit xxHash."""
        test_file = tmp_path / "test.jpg"
        content = b"Hello, World!"
        test_file.write_bytes(content)

        result = compute_file_hash(test_file)

        assert result == xxhash.xxh3_128(content).hexdigest()
        assert len(result) == 32

    def test_sha256(self, tmp_path):
        test_file = tmp_path / "test.jpg"
        content = b"Test content"
        test_file.write_bytes(content)

        result = compute_file_hash(test_file, algorithm="sha256")

        assert result == hashlib.sha256(content).hexdigest()

    def test_empty_file(self, tmp_path):
        test_file = tmp_path / "empty.jpg"
        test_file.write_bytes(b"")

        assert compute_file_hash(test_file) == xxhash.xxh3_128(b"").hexdigest()

    def test_chunked_reading_matches_whole(self, tmp_path):
        """Files larger than one chunk hash the same as in one piece."""
        test_file = tmp_path / "large.bin"
        content = bytes(range(256)) * (DEFAULT_CHUNK_SIZE // 64)
        test_file.write_bytes(content)

        result = compute_file_hash(test_file, chunk_size=1000)

        assert result == xxhash.xxh3_128(content).hexdigest()

    def test_identical_content_same_hash(self, tmp_path):
        a = pytest.create_test_file(tmp_path, "a/x.jpg", b"same bytes")
        b = pytest.create_test_file(tmp_path, "b/y.jpg", b"same bytes")

        assert compute_file_hash(a) == compute_file_hash(b)

    def test_nonexistent_file_returns_none(self, tmp_path):
        assert compute_file_hash(tmp_path / "nonexistent.jpg") is None

    def test_permission_error_returns_none(self, tmp_path):
        test_file = tmp_path / "locked.jpg"
        test_file.write_bytes(b"data")

        with patch("builtins.open", side_effect=PermissionError("denied")):
            assert compute_file_hash(test_file) is None

    def test_unsupported_algorithm_raises(self, tmp_path):
        test_file = tmp_path / "test.jpg"
        test_file.write_bytes(b"data")

        with pytest.raises(ValueError):
            compute_file_hash(test_file, algorithm="crc32")
