"""Image Metadata Validation — size and dimension rules for uploaded image references.

Invariants:
    - Width and height are each within 300–1024 px
    - Byte size is within 1 byte – 5 MB
    - When a byte size is given, width and height must both be present
    - An absent url means "no image"; the other fields are then ignored

Design Decisions:
    - Only metadata is validated: the binary lives in object storage, never in the API
"""

IMAGE_URL_MAX_LENGTH: int = 400
IMAGE_MIN_DIMENSION: int = 300
IMAGE_MAX_DIMENSION: int = 1024
IMAGE_MAX_BYTES: int = 5_242_880


def validate_image(
    label: str,
    url: str | None,
    width: int | None,
    height: int | None,
    size_bytes: int | None,
) -> list[str]:
    """Validate one image reference (profile picture, team logo, thumbnail...)."""
    if not url:
        return []

    errors = []
    if len(url) > IMAGE_URL_MAX_LENGTH:
        errors.append(f"{label} URL must be at most {IMAGE_URL_MAX_LENGTH} characters.")
    if size_bytes is not None:
        if not 1 <= size_bytes <= IMAGE_MAX_BYTES:
            errors.append(f"{label} size must be between 1 byte and 5MB.")
        if width is None or height is None:
            errors.append(f"{label} width and height are required when size is provided.")
    for dim_name, value in (("width", width), ("height", height)):
        if value is not None and not IMAGE_MIN_DIMENSION <= value <= IMAGE_MAX_DIMENSION:
            errors.append(
                f"{label} {dim_name} must be between {IMAGE_MIN_DIMENSION} "
                f"and {IMAGE_MAX_DIMENSION} px.",
            )
    return errors


def validate_image_fields(payload: dict, prefixes: dict[str, str]) -> list[str]:
    """Validate several images stored under `<prefix>_url`, `<prefix>_width`... keys.

    prefixes maps a field prefix (e.g. "thumbnail") to its human label.
    """
    errors = []
    for prefix, label in prefixes.items():
        errors.extend(validate_image(
            label,
            payload.get(f"{prefix}_url"),
            payload.get(f"{prefix}_width"),
            payload.get(f"{prefix}_height"),
            payload.get(f"{prefix}_bytes"),
        ))
    return errors
