"""
Variant matrix operations.

Pure functions over lists of VariantRecord: no database access. The product
editor calls these whenever the selected colors/sizes change or a variant
card is edited, and the save flow persists the result.

Conventions:
    - Records that are not touched by an operation are returned as the
      same objects (callers rely on identity to detect edits).
    - Touched records are copied, never mutated in place.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional, Sequence
import structlog

from models.variant import VariantRecord, VariantKey, MediaType
from exceptions import (
    VariantNotFoundError,
    MediaTargetRequiredError,
    MediaUrlsRequiredError,
    MediaIndexError,
)
from utils.number_utils import round_half_up
from utils.media_urls import clean_url

logger = structlog.get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _media_field(media_type: MediaType) -> str:
    return "image_urls" if MediaType(media_type) == MediaType.IMAGE else "video_urls"


def variant_key(color_id: Optional[str], size_id: str) -> VariantKey:
    """
    Build the matrix key for a color/size pair.

    Blank color ids collapse to None; the string "null" is a real id.
    """
    if color_id is not None and not str(color_id).strip():
        color_id = None
    return (color_id, size_id)


def build_default_variant(
    color_id: Optional[str],
    size_id: str,
    now: Optional[datetime] = None
) -> VariantRecord:
    """
    Fabricate an empty variant for a new matrix cell.

    Numbers zeroed, SKU empty, no media, fresh timestamps.
    """
    now = now or _now()
    return VariantRecord(
        color_id=color_id,
        size_id=size_id,
        created_at=now,
        updated_at=now,
    )


def index_variants(records: Iterable[VariantRecord]) -> dict[VariantKey, VariantRecord]:
    """Map records by key. On duplicate keys the last record wins."""
    return {record.key: record for record in records}


# ===================
# MATRIX SYNCHRONIZATION
# ===================

def sync_variants(
    records: Sequence[VariantRecord],
    selected_colors: Sequence[str],
    selected_sizes: Sequence[str],
    now: Optional[datetime] = None
) -> list[VariantRecord]:
    """
    Reconcile the variant list with the selected axes.

    Enumerates colors (outer) x sizes (inner), or sizes alone when no color
    is selected. A key that already exists keeps its record object untouched
    (prices, SKU, stock and media survive axis toggles); a new key gets a
    default record. Records whose key is not enumerated are dropped.

    Running it again with the same axes on its own output returns an equal
    list of the same objects.

    Args:
        records: Previous variant list
        selected_colors: Color ids (may be empty)
        selected_sizes: Size ids

    Returns:
        The complete new variant list
    """
    existing = index_variants(records)
    now = now or _now()

    colors: list[Optional[str]] = list(dict.fromkeys(selected_colors)) or [None]
    sizes = list(dict.fromkeys(selected_sizes))

    result: list[VariantRecord] = []
    created = 0
    for color_id in colors:
        for size_id in sizes:
            record = existing.get(variant_key(color_id, size_id))
            if record is None:
                record = build_default_variant(color_id, size_id, now=now)
                created += 1
            result.append(record)

    logger.debug(
        "variants_synced",
        colors=len(selected_colors),
        sizes=len(selected_sizes),
        previous=len(records),
        kept=len(result) - created,
        created=created,
        dropped=len(existing) - (len(result) - created)
    )

    return result


def derive_axes(records: Iterable[VariantRecord]) -> tuple[list[str], list[str]]:
    """
    Selected colors and sizes implied by a variant list.

    Colors are the distinct non-null color ids, sizes the distinct size
    ids, both in first-appearance order.
    """
    colors: list[str] = []
    sizes: list[str] = []
    for record in records:
        if record.color_id is not None and record.color_id not in colors:
            colors.append(record.color_id)
        if record.size_id not in sizes:
            sizes.append(record.size_id)
    return colors, sizes


def remove_variant(
    records: Sequence[VariantRecord],
    color_id: Optional[str],
    size_id: str
) -> tuple[list[VariantRecord], list[str], list[str]]:
    """
    Remove one variant card and contract the axes to what is left.

    Removing the last variant of a color (or size) also deselects that
    color (or size).

    Returns:
        Tuple of (remaining records, selected colors, selected sizes)

    Raises:
        VariantNotFoundError: If no record has that key
    """
    key = variant_key(color_id, size_id)
    remaining = [record for record in records if record.key != key]

    if len(remaining) == len(records):
        raise VariantNotFoundError(color_id, size_id)

    colors, sizes = derive_axes(remaining)

    logger.info(
        "variant_removed",
        color_id=color_id,
        size_id=size_id,
        remaining=len(remaining),
        colors=len(colors),
        sizes=len(sizes)
    )

    return remaining, colors, sizes


def find_variant(
    records: Sequence[VariantRecord],
    color_id: Optional[str],
    size_id: str
) -> VariantRecord:
    """
    Get the record for a key.

    Raises:
        VariantNotFoundError: If no record has that key
    """
    key = variant_key(color_id, size_id)
    for record in records:
        if record.key == key:
            return record
    raise VariantNotFoundError(color_id, size_id)


def replace_variant(
    records: Sequence[VariantRecord],
    updated: VariantRecord
) -> list[VariantRecord]:
    """Swap in the record with the same key; other records keep identity."""
    return [updated if record.key == updated.key else record for record in records]


# ===================
# PRICING
# ===================

def calculate_discount(mrp, rsp) -> int:
    """
    Discount percentage of rsp against mrp.

    Formula: round_half_up((mrp - rsp) / mrp * 100), only when both prices
    are positive and rsp <= mrp; anything else is 0.

    Examples:
        calculate_discount(100, 80) -> 20
        calculate_discount(100, 120) -> 0
        calculate_discount(0, 50) -> 0
    """
    if not mrp or not rsp:
        return 0

    mrp = Decimal(str(mrp))
    rsp = Decimal(str(rsp))
    if mrp <= 0 or rsp <= 0 or rsp > mrp:
        return 0

    return round_half_up((mrp - rsp) / mrp * 100)


def update_variant_pricing(
    record: VariantRecord,
    mrp_price=None,
    rsp_price=None,
    cost_price=None,
    now: Optional[datetime] = None
) -> VariantRecord:
    """
    Apply price edits to a variant.

    Editing mrp or rsp recomputes the discount; editing rsp also sets the
    generic price field, which always mirrors rsp.

    Returns:
        A new record (the input is unchanged)
    """
    update: dict = {}
    if mrp_price is not None:
        update["mrp_price"] = round_half_up(mrp_price)
    if rsp_price is not None:
        update["rsp_price"] = round_half_up(rsp_price)
        update["price"] = update["rsp_price"]
    if cost_price is not None:
        update["cost_price"] = round_half_up(cost_price)

    if not update:
        return record

    if "mrp_price" in update or "rsp_price" in update:
        update["discount_percentage"] = calculate_discount(
            update.get("mrp_price", record.mrp_price),
            update.get("rsp_price", record.rsp_price)
        )

    update["updated_at"] = now or _now()
    return record.model_copy(update=update)


# ===================
# MEDIA
# ===================

def _union(existing: Sequence[str], incoming: Iterable[str]) -> list[str]:
    """Set union that keeps existing order, then new URLs in given order."""
    merged = list(existing)
    for url in incoming:
        if url not in merged:
            merged.append(url)
    return merged


def apply_media_to_sizes(
    records: Sequence[VariantRecord],
    selected_colors: Sequence[str],
    selected_sizes: Sequence[str],
    urls: Sequence[str],
    media_type: MediaType,
    target_size_ids: Sequence[str],
    now: Optional[datetime] = None
) -> tuple[list[VariantRecord], list[str]]:
    """
    Assign uploaded media to every variant of the chosen sizes.

    For each target size:
        - variants exist for it (any color): the URLs are merged into each
          one's media list without duplicates
        - none exist: a new variant is created for the size carrying the
          URLs, one per selected color, or a single color-less one when
          no color is selected

    Target sizes that are not selected yet are added to the selection. The
    returned records already match the widened axes, so the next
    sync_variants pass keeps them as they are.

    Returns:
        Tuple of (records, selected sizes)

    Raises:
        MediaTargetRequiredError: If no target size is given
        MediaUrlsRequiredError: If no non-blank URL is given
    """
    targets = [size_id for size_id in dict.fromkeys(target_size_ids) if size_id]
    if not targets:
        raise MediaTargetRequiredError()

    incoming = list(dict.fromkeys(url for url in map(clean_url, urls) if url))
    if not incoming:
        raise MediaUrlsRequiredError()

    now = now or _now()
    field = _media_field(media_type)

    updated = list(records)
    merged_count = 0
    created_count = 0

    for size_id in targets:
        positions = [i for i, record in enumerate(updated) if record.size_id == size_id]

        if positions:
            for i in positions:
                record = updated[i]
                media = _union(getattr(record, field), incoming)
                if media != getattr(record, field):
                    updated[i] = record.model_copy(update={field: media, "updated_at": now})
                    merged_count += 1
            continue

        colors: list[Optional[str]] = list(selected_colors) if selected_colors else [None]
        for color_id in colors:
            record = build_default_variant(color_id, size_id, now=now)
            updated.append(record.model_copy(update={field: list(incoming)}))
            created_count += 1

    sizes = list(selected_sizes)
    sizes.extend(size_id for size_id in targets if size_id not in sizes)

    logger.info(
        "media_applied_to_sizes",
        media_type=MediaType(media_type).value,
        urls=len(incoming),
        sizes=len(targets),
        merged=merged_count,
        created=created_count,
        added_sizes=len(sizes) - len(selected_sizes)
    )

    return updated, sizes


def append_variant_media(
    records: Sequence[VariantRecord],
    color_id: Optional[str],
    size_id: str,
    urls: Sequence[str],
    media_type: MediaType,
    now: Optional[datetime] = None
) -> list[VariantRecord]:
    """
    Append media to one variant in the given order.

    Raises:
        VariantNotFoundError: If no record has that key
    """
    record = find_variant(records, color_id, size_id)
    field = _media_field(media_type)
    media = list(getattr(record, field)) + [url for url in urls if url]
    return replace_variant(
        records,
        record.model_copy(update={field: media, "updated_at": now or _now()})
    )


def remove_variant_media(
    records: Sequence[VariantRecord],
    color_id: Optional[str],
    size_id: str,
    media_type: MediaType,
    index: int,
    now: Optional[datetime] = None
) -> list[VariantRecord]:
    """
    Remove the media at one position of one variant.

    Raises:
        VariantNotFoundError: If no record has that key
        MediaIndexError: If the position does not exist
    """
    record = find_variant(records, color_id, size_id)
    field = _media_field(media_type)
    media = list(getattr(record, field))

    if index < 0 or index >= len(media):
        raise MediaIndexError(index, len(media))

    del media[index]
    return replace_variant(
        records,
        record.model_copy(update={field: media, "updated_at": now or _now()})
    )


def remove_media_everywhere(
    records: Sequence[VariantRecord],
    url: str,
    media_type: MediaType,
    now: Optional[datetime] = None
) -> list[VariantRecord]:
    """Remove a URL from every variant that carries it."""
    field = _media_field(media_type)
    now = now or _now()

    result = []
    removed = 0
    for record in records:
        media = getattr(record, field)
        if url in media:
            record = record.model_copy(
                update={field: [u for u in media if u != url], "updated_at": now}
            )
            removed += 1
        result.append(record)

    logger.info("media_removed_everywhere", media_type=MediaType(media_type).value, variants=removed)
    return result
