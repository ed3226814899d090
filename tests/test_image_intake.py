"""Tests for core.image_intake module."""

import io
from pathlib import Path

import pytest
from PIL import Image

from core.errors import (
    EmptyFile,
    FileNotFound,
    FileTooLarge,
    UnreadableImage,
    UnsupportedMediaType,
    ValidationError,
)
from core.image_intake import (
    ImageIntake,
    create_thumbnail,
    decode_data_url,
    encode_data_url,
    normalize_media_type,
)
from core.utils import MAX_UPLOAD_BYTES


class TestMediaTypes:
    def test_aliases(self):
        assert normalize_media_type("image/jpg") == "image/jpeg"
        assert normalize_media_type("IMAGE/PNG; charset=binary") == "image/png"

    def test_empty(self):
        assert normalize_media_type(None) == ""


class TestDataUrl:
    def test_round_trip_preserves_bytes(self, sample_jpeg):
        data = Path(sample_jpeg).read_bytes()
        media_type, decoded = decode_data_url(encode_data_url(data, "image/jpeg"))
        assert media_type == "image/jpeg"
        assert decoded == data

    def test_rejects_non_data_url(self):
        with pytest.raises(ValueError):
            decode_data_url("http://example.com/a.png")

    def test_rejects_non_base64(self):
        with pytest.raises(ValueError):
            decode_data_url("data:image/png,plain")


class TestValidate:
    def test_accepts_jpeg(self, sample_jpeg):
        image = ImageIntake().validate(sample_jpeg)
        assert image.media_type == "image/jpeg"
        assert image.file_name == "fundus.jpg"
        assert image.size_bytes == Path(sample_jpeg).stat().st_size
        assert (image.width, image.height) == (64, 48)
        assert image.data_url.startswith("data:image/jpeg;base64,")

    def test_accepts_png(self, sample_png):
        image = ImageIntake().validate(sample_png)
        assert image.media_type == "image/png"

    def test_preview_round_trips_to_original_bytes(self, sample_png):
        image = ImageIntake().validate(sample_png)
        _, data = decode_data_url(image.data_url)
        assert data == Path(sample_png).read_bytes()

    def test_rejects_gif(self, sample_gif):
        with pytest.raises(UnsupportedMediaType):
            ImageIntake().validate(sample_gif)

    def test_rejects_declared_type_even_with_good_bytes(self, sample_png):
        with pytest.raises(UnsupportedMediaType):
            ImageIntake().validate(sample_png, media_type="image/webp")

    def test_rejects_unknown_extension(self, tmp_dir):
        path = tmp_dir / "notes.txt"
        path.write_text("not an image")
        with pytest.raises(UnsupportedMediaType):
            ImageIntake().validate(str(path))

    def test_missing_file(self, tmp_dir):
        with pytest.raises(FileNotFound):
            ImageIntake().validate(str(tmp_dir / "missing.jpg"))

    def test_empty_path(self):
        with pytest.raises(FileNotFound):
            ImageIntake().validate("")

    def test_empty_file(self, tmp_dir):
        path = tmp_dir / "empty.png"
        path.touch()
        with pytest.raises(EmptyFile):
            ImageIntake().validate(str(path))

    def test_empty_file_reported_before_media_type(self, tmp_dir):
        path = tmp_dir / "empty.gif"
        path.touch()
        with pytest.raises(EmptyFile):
            ImageIntake().validate(str(path))

    def test_accepts_multi_picture_jpeg(self, tmp_dir):
        path = tmp_dir / "camera.jpg"
        Image.new("RGB", (40, 30), "red").save(path, format="MPO")
        image = ImageIntake().validate(str(path))
        assert image.media_type == "image/jpeg"
        assert (image.width, image.height) == (40, 30)

    def test_oversized_file(self, sample_png):
        intake = ImageIntake(max_bytes=16)
        with pytest.raises(FileTooLarge):
            intake.validate(sample_png)

    def test_default_limit_is_ten_mib(self):
        assert ImageIntake().max_bytes == MAX_UPLOAD_BYTES == 10 * 1024 * 1024

    def test_corrupt_bytes(self, tmp_dir):
        path = tmp_dir / "broken.jpg"
        path.write_bytes(b"\xff\xd8\xff" + b"garbage" * 10)
        with pytest.raises(UnreadableImage):
            ImageIntake().validate(str(path))

    def test_content_must_match_declared_type(self, sample_png, tmp_dir):
        renamed = tmp_dir / "really_png.jpg"
        renamed.write_bytes(Path(sample_png).read_bytes())
        with pytest.raises(UnreadableImage):
            ImageIntake().validate(str(renamed))

    def test_errors_are_validation_errors_with_messages(self, sample_gif):
        with pytest.raises(ValidationError) as excinfo:
            ImageIntake().validate(sample_gif)
        assert "JPEG or PNG" in excinfo.value.message


class TestValidateBytes:
    def test_in_memory_png(self, sample_png):
        data = Path(sample_png).read_bytes()
        image = ImageIntake().validate_bytes(data, "upload.png", "image/png")
        assert image.file_name == "upload.png"
        assert image.size_bytes == len(data)

    def test_empty_payload(self):
        with pytest.raises(EmptyFile):
            ImageIntake().validate_bytes(b"", "x.png", "image/png")


class TestThumbnail:
    def test_jpeg_thumbnail(self, sample_png):
        image = ImageIntake().validate(sample_png)
        thumb = create_thumbnail(image, size=(16, 16))
        assert thumb[:2] == b"\xff\xd8"
        with Image.open(io.BytesIO(thumb)) as img:
            assert max(img.size) <= 16

    def test_preview_fits_box_and_keeps_aspect(self, tmp_dir):
        path = tmp_dir / "wide.png"
        Image.new("RGB", (1280, 960), "blue").save(path, format="PNG")
        image = ImageIntake().validate(str(path))
        with Image.open(io.BytesIO(create_thumbnail(image, size=(320, 180)))) as img:
            assert img.size == (240, 180)
