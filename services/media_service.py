"""
Media link ingestion for variant cards.

Pasted image links are normalized and probed before they are kept: a link
that does not render as an image within the time budget is discarded and
the admin gets a message instead. Video links are normalized only.
"""

import time
from typing import Callable, Optional
import requests
import structlog

from config import settings
from models.variant import (
    MediaType,
    MediaLinkRequest,
    MediaLinkResponse,
)
from services import variant_matrix
from utils.media_urls import (
    extract_drive_file_id,
    image_url_candidates,
    normalize_video_url,
)

logger = structlog.get_logger(__name__)

DRIVE_PRIVATE_MESSAGE = (
    "Google Drive Image Error: The image appears to be private or requires "
    "authentication. Please make sure the image is set to \"Anyone with the "
    "link can view\" in Google Drive sharing settings."
)
IMAGE_UNREACHABLE_MESSAGE = (
    "Image Error: The image failed to load. Please check if the URL is "
    "correct and the image is publicly accessible."
)


class MediaService:
    """
    Verify-or-discard handling of pasted media links.

    The probe function is injectable so callers (and tests) can swap the
    network check.
    """

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        probe: Optional[Callable[[str, float], bool]] = None
    ):
        self.timeout_seconds = timeout_seconds or settings.image_probe_timeout_seconds
        self.probe = probe or self.probe_image

    # ===================
    # PROBING
    # ===================

    @staticmethod
    def probe_image(url: str, timeout: float) -> bool:
        """
        Check that a URL serves an image.

        Args:
            url: Link to fetch
            timeout: Seconds before giving up

        Returns:
            True if the response is successful and has an image content type
        """
        try:
            response = requests.get(
                url,
                timeout=timeout,
                stream=True,
                allow_redirects=True,
                headers={"User-Agent": settings.image_probe_user_agent}
            )
            try:
                content_type = response.headers.get("Content-Type", "")
                return response.ok and content_type.lower().startswith("image/")
            finally:
                response.close()

        except requests.exceptions.RequestException as e:
            logger.debug("image_probe_failed", url=url, error=str(e))
            return False

    def resolve_image_url(self, raw_url: str) -> Optional[str]:
        """
        First candidate link that renders, within the time budget.

        Args:
            raw_url: Link as pasted

        Returns:
            Working URL, or None if every candidate failed or time ran out
        """
        deadline = time.monotonic() + self.timeout_seconds

        for candidate in image_url_candidates(raw_url):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning("image_probe_timeout", url=raw_url)
                return None

            if self.probe(candidate, remaining):
                logger.info("image_url_verified", url=candidate)
                return candidate

            logger.debug("image_candidate_rejected", url=candidate)

        return None

    # ===================
    # INGESTION
    # ===================

    def add_media_link(self, request: MediaLinkRequest) -> MediaLinkResponse:
        """
        Attach a pasted link to one variant.

        Images are probed unless request.verify is False; a link that does
        not load leaves the matrix unchanged and returns accepted=False.

        Raises:
            VariantNotFoundError: If the target variant does not exist
        """
        # Fail on an unknown variant before spending time on the network
        variant_matrix.find_variant(request.variants, request.color_id, request.size_id)

        if request.media_type == MediaType.VIDEO:
            url = normalize_video_url(request.url)
        elif request.verify:
            url = self.resolve_image_url(request.url)
            if url is None:
                message = (
                    DRIVE_PRIVATE_MESSAGE
                    if extract_drive_file_id(request.url)
                    else IMAGE_UNREACHABLE_MESSAGE
                )
                logger.warning(
                    "media_link_discarded",
                    url=request.url,
                    color_id=request.color_id,
                    size_id=request.size_id
                )
                return MediaLinkResponse(
                    variants=request.variants,
                    selected_colors=request.selected_colors,
                    selected_sizes=request.selected_sizes,
                    accepted=False,
                    message=message
                )
        else:
            url = image_url_candidates(request.url)[0]

        variants = variant_matrix.append_variant_media(
            request.variants,
            request.color_id,
            request.size_id,
            [url],
            request.media_type
        )

        logger.info(
            "media_link_added",
            media_type=request.media_type.value,
            url=url,
            color_id=request.color_id,
            size_id=request.size_id
        )

        return MediaLinkResponse(
            variants=variants,
            selected_colors=request.selected_colors,
            selected_sizes=request.selected_sizes,
            accepted=True,
            url=url
        )


# Singleton instance for convenience
_media_service: Optional[MediaService] = None

def get_media_service() -> MediaService:
    """Get or create MediaService instance."""
    global _media_service
    if _media_service is None:
        _media_service = MediaService()
    return _media_service
