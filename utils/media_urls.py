"""
Media link normalization.

Admins paste share links (mostly Google Drive) into the variant cards.
Share links render a viewer page, not the file, so they are rewritten into
direct links before being stored.
"""

import re
from typing import Optional

DRIVE_FILE_PATTERN = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
WHITESPACE_PATTERN = re.compile(r"\s+")

DRIVE_IMAGE_TEMPLATE = "https://drive.google.com/thumbnail?id={file_id}&sz=w1200"
DRIVE_VIDEO_TEMPLATE = "https://drive.google.com/uc?export=view&id={file_id}"

# Tried in order when the primary thumbnail link does not render
DRIVE_IMAGE_FALLBACKS = (
    "https://drive.google.com/uc?export=view&id={file_id}",
    "https://drive.google.com/thumbnail?id={file_id}&sz=w800",
    "https://drive.google.com/thumbnail?id={file_id}&sz=w600",
    "https://drive.google.com/thumbnail?id={file_id}&sz=w400",
)


def clean_url(url: Optional[str]) -> str:
    """Remove every whitespace character (pasted links often wrap lines)."""
    if not url:
        return ""
    return WHITESPACE_PATTERN.sub("", url)


def extract_drive_file_id(url: Optional[str]) -> Optional[str]:
    """
    Get the file id from a Google Drive share link.

    Examples:
        "https://drive.google.com/file/d/1AbC_x-9/view?usp=sharing" -> "1AbC_x-9"
        "https://example.com/a.jpg" -> None
    """
    match = DRIVE_FILE_PATTERN.search(clean_url(url))
    return match.group(1) if match else None


def normalize_image_url(url: Optional[str]) -> str:
    """
    Rewrite an image share link into a directly renderable link.

    Unrecognized links are returned with whitespace removed.
    """
    cleaned = clean_url(url)
    file_id = extract_drive_file_id(cleaned)
    if file_id:
        return DRIVE_IMAGE_TEMPLATE.format(file_id=file_id)
    return cleaned


def normalize_video_url(url: Optional[str]) -> str:
    """Rewrite a video share link into a direct download/view link."""
    cleaned = clean_url(url)
    file_id = extract_drive_file_id(cleaned)
    if file_id:
        return DRIVE_VIDEO_TEMPLATE.format(file_id=file_id)
    return cleaned


def image_url_candidates(url: Optional[str]) -> list[str]:
    """
    Links to probe for a pasted image, best first.

    Non-Drive links have a single candidate.
    """
    primary = normalize_image_url(url)
    if not primary:
        return []

    file_id = extract_drive_file_id(url)
    if not file_id:
        return [primary]

    candidates = [primary]
    for template in DRIVE_IMAGE_FALLBACKS:
        candidate = template.format(file_id=file_id)
        if candidate not in candidates:
            candidates.append(candidate)
    return candidates
