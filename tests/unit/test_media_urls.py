"""
Unit tests for media link normalization.

Run: pytest tests/unit/test_media_urls.py -v
"""

from utils.media_urls import (
    clean_url,
    extract_drive_file_id,
    normalize_image_url,
    normalize_video_url,
    image_url_candidates,
)

SHARE_LINK = "https://drive.google.com/file/d/1AbC_x-9/view?usp=sharing"


class TestCleanUrl:
    """Tests for clean_url()"""

    def test_strips_all_whitespace(self):
        assert clean_url("  https://cdn.example.com/\n a.jpg \t") == "https://cdn.example.com/a.jpg"

    def test_none_is_empty(self):
        assert clean_url(None) == ""


class TestExtractDriveFileId:
    """Tests for extract_drive_file_id()"""

    def test_share_link(self):
        assert extract_drive_file_id(SHARE_LINK) == "1AbC_x-9"

    def test_other_link(self):
        assert extract_drive_file_id("https://cdn.example.com/a.jpg") is None


class TestNormalize:
    """Tests for normalize_image_url() and normalize_video_url()"""

    def test_drive_image_becomes_thumbnail(self):
        assert normalize_image_url(SHARE_LINK) == (
            "https://drive.google.com/thumbnail?id=1AbC_x-9&sz=w1200"
        )

    def test_drive_video_becomes_export_view(self):
        assert normalize_video_url(SHARE_LINK) == (
            "https://drive.google.com/uc?export=view&id=1AbC_x-9"
        )

    def test_unrecognized_passes_through_trimmed(self):
        assert normalize_image_url(" https://cdn.example.com/a.jpg ") == "https://cdn.example.com/a.jpg"
        assert normalize_video_url("https://cdn.example.com/v.mp4") == "https://cdn.example.com/v.mp4"


class TestImageUrlCandidates:
    """Tests for image_url_candidates()"""

    def test_drive_link_has_fallbacks_in_order(self):
        candidates = image_url_candidates(SHARE_LINK)

        assert candidates == [
            "https://drive.google.com/thumbnail?id=1AbC_x-9&sz=w1200",
            "https://drive.google.com/uc?export=view&id=1AbC_x-9",
            "https://drive.google.com/thumbnail?id=1AbC_x-9&sz=w800",
            "https://drive.google.com/thumbnail?id=1AbC_x-9&sz=w600",
            "https://drive.google.com/thumbnail?id=1AbC_x-9&sz=w400",
        ]

    def test_plain_link_single_candidate(self):
        assert image_url_candidates("https://cdn.example.com/a.jpg") == ["https://cdn.example.com/a.jpg"]

    def test_blank_link_no_candidates(self):
        assert image_url_candidates("   ") == []
