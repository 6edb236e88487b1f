"""Tests for the PNG codec in the preview export module.

This module tests:
- PNG encoding of RGBA and RGB arrays
- Input validation
- Cleanup of partially written files and preservation of existing output
- PNG decoding to RGBA
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestSavePngFromArray:
    """Test PNG encoding."""

    def test_save_rgba(self, tmp_path):
        """Test saving an RGBA array creates a valid PNG."""
        from src.python.preview.export import save_png_from_array

        image = np.zeros((8, 6, 4), dtype=np.uint8)
        image[..., 0] = 200
        image[..., 3] = 255
        path = save_png_from_array(image, tmp_path / "rgba.png")

        with PILImage.open(path) as img:
            assert img.format == "PNG"
            assert img.mode == "RGBA"
            assert img.size == (6, 8)

    def test_save_rgb(self, tmp_path):
        """Test saving an RGB array creates an RGB PNG."""
        from src.python.preview.export import save_png_from_array

        image = np.full((4, 4, 3), 64, dtype=np.uint8)
        path = save_png_from_array(image, str(tmp_path / "rgb.png"))

        with PILImage.open(path) as img:
            assert img.mode == "RGB"

    def test_rejects_float_array(self, tmp_path):
        """Test non-uint8 input raises ValueError."""
        from src.python.preview.export import save_png_from_array

        with pytest.raises(ValueError, match="dtype"):
            save_png_from_array(np.zeros((2, 2, 4), dtype=np.float32), tmp_path / "x.png")

    @pytest.mark.parametrize("shape", [(2, 2), (2, 2, 2), (2, 2, 5)])
    def test_rejects_bad_shape(self, tmp_path, shape):
        """Test unsupported shapes raise ValueError before touching disk."""
        from src.python.preview.export import save_png_from_array

        target = tmp_path / "x.png"
        with pytest.raises(ValueError, match="shape"):
            save_png_from_array(np.zeros(shape, dtype=np.uint8), target)
        assert not target.exists()

    def test_partial_file_removed_on_encode_failure(self, tmp_path, monkeypatch):
        """Test a failure during encoding removes the partial file and re-raises."""
        from src.python.preview.export import save_png_from_array

        def failing_save(self, fp, *args, **kwargs):
            fp.write(b"\x89PNG partial")
            raise OSError("disk full")

        monkeypatch.setattr(PILImage.Image, "save", failing_save)

        target = tmp_path / "partial.png"
        with pytest.raises(OSError, match="disk full"):
            save_png_from_array(np.zeros((2, 2, 4), dtype=np.uint8), target)
        assert not target.exists()
        assert list(tmp_path.iterdir()) == []

    def test_existing_file_kept_on_encode_failure(self, tmp_path, monkeypatch):
        """Test a failed encode leaves a previous image untouched."""
        from src.python.preview.export import save_png_from_array

        target = tmp_path / "keep.png"
        original = np.full((2, 3, 4), 77, dtype=np.uint8)
        save_png_from_array(original, target)
        before = target.read_bytes()

        def failing_save(self, fp, *args, **kwargs):
            fp.write(b"\x89PNG partial")
            raise OSError("disk full")

        monkeypatch.setattr(PILImage.Image, "save", failing_save)

        with pytest.raises(OSError, match="disk full"):
            save_png_from_array(np.zeros((2, 2, 4), dtype=np.uint8), target)
        assert target.read_bytes() == before
        assert [p.name for p in tmp_path.iterdir()] == ["keep.png"]

    def test_new_file_is_world_readable(self, tmp_path):
        """Test a newly created image is not left with temporary-file permissions."""
        from src.python.preview.export import NEW_FILE_MODE, save_png_from_array

        path = save_png_from_array(np.zeros((2, 2, 4), dtype=np.uint8), tmp_path / "m.png")
        assert path.stat().st_mode & 0o777 == NEW_FILE_MODE

    def test_destination_is_directory(self, tmp_path):
        """Test writing onto a directory raises OSError and leaves no temporary file."""
        from src.python.preview.export import save_png_from_array

        target = tmp_path / "dir"
        target.mkdir()
        with pytest.raises(OSError):
            save_png_from_array(np.zeros((2, 2, 4), dtype=np.uint8), target)
        assert [p.name for p in tmp_path.iterdir()] == ["dir"]


class TestLoadPng:
    """Test PNG decoding."""

    def test_round_trip_exact(self, tmp_path):
        """Test saved pixels decode unchanged."""
        from src.python.preview.export import load_png, save_png_from_array

        rng = np.random.default_rng(7)
        image = rng.integers(0, 256, size=(5, 9, 4), dtype=np.uint8)
        path = save_png_from_array(image, tmp_path / "rt.png")

        decoded = load_png(path)
        assert decoded.dtype == np.uint8
        assert np.array_equal(decoded, image)

    def test_rgb_decodes_opaque(self, tmp_path):
        """Test RGB files decode with an opaque alpha channel."""
        from src.python.preview.export import load_png

        path = tmp_path / "rgb.png"
        PILImage.new("RGB", (3, 2), (10, 20, 30)).save(path)

        decoded = load_png(path)
        assert decoded.shape == (2, 3, 4)
        assert np.all(decoded == np.array([10, 20, 30, 255], dtype=np.uint8))

    def test_not_a_png(self, tmp_path):
        """Test a non-PNG file raises OSError."""
        from src.python.preview.export import load_png

        path = tmp_path / "fake.png"
        path.write_bytes(b"plain text")
        with pytest.raises(OSError):
            load_png(path)

