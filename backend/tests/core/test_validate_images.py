"""Image Metadata Validation — dimensions, byte size and the no-image case."""

from fantasy_api.core.validate_images import validate_image, validate_image_fields


def test_no_url_means_no_image():
    assert validate_image("Logo", None, 10, 10, 10_000_000) == []


def test_valid_image():
    assert validate_image("Logo", "https://cdn/x.png", 512, 512, 20_000) == []


def test_dimension_out_of_range():
    errors = validate_image("Logo", "https://cdn/x.png", 200, 2000, None)
    assert len(errors) == 2
    assert "Logo width" in errors[0]
    assert "Logo height" in errors[1]


def test_size_requires_dimensions():
    errors = validate_image("Logo", "https://cdn/x.png", None, None, 1000)
    assert errors == ["Logo width and height are required when size is provided."]


def test_size_above_five_megabytes():
    errors = validate_image("Logo", "https://cdn/x.png", 400, 400, 5_242_881)
    assert errors == ["Logo size must be between 1 byte and 5MB."]


def test_validate_image_fields_uses_prefixes():
    payload = {
        "thumbnail_url": "https://cdn/t.png",
        "thumbnail_width": 100,
        "thumbnail_height": 400,
        "team_image_url": None,
    }
    errors = validate_image_fields(payload, {"team_image": "Team image", "thumbnail": "Thumbnail"})
    assert errors == ["Thumbnail width must be between 300 and 1024 px."]
