"""Upload result model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadResult:
    """Public location of an uploaded image on the media host."""

    url: str  # HTTPS URL served by the media host
    public_id: str  # Media host identifier, e.g. "products/abc123"
