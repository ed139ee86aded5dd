"""Circle gap codec.

A control or finish circle can have gaps so it does not hide map detail.
Gaps are stored as a 32-bit mask: bit i covers the 11.25 degree sector
starting at ``i * 360 / 32`` degrees; a set bit means the sector is drawn.

Decoding yields gap angles as flat (start, end) pairs. Drawn arcs are the
complement: each arc runs from the end of one gap to the start of the next.
"""

from collections.abc import Sequence

from coursemark.exceptions import GapMaskError

# Mask with every sector drawn.
FULL_CIRCLE = 0xFFFFFFFF

# Stand-in gap for a fully gapped circle, so callers still get a pair.
ALL_GAP = (0.0, 359.9999)

SECTORS = 32
SECTOR_DEGREES = 360.0 / SECTORS


def _bit(mask: int, index: int) -> bool:
    return bool(mask >> (index % SECTORS) & 1)


def check_mask(mask: int) -> int:
    """Validate a gap mask.

    Raises:
        GapMaskError: If the mask is not a 32-bit unsigned value
    """
    if isinstance(mask, bool) or not isinstance(mask, int) or not 0 <= mask <= FULL_CIRCLE:
        raise GapMaskError(mask)
    return mask


def compute_circle_gaps(mask: int) -> tuple[float, ...] | None:
    """Convert a gap mask into gap angles.

    Args:
        mask: 32-bit sector mask, set bits drawn

    Returns:
        None when nothing is gapped; otherwise flat (start, end) pairs in
        degrees, in increasing sector order starting at the first gap.

    Raises:
        GapMaskError: If the mask is not a 32-bit unsigned value
    """
    check_mask(mask)
    if mask == FULL_CIRCLE:
        return None
    if mask == 0:
        return ALL_GAP

    # Scan origin: the first drawn-to-gap transition
    first_gap = 0
    for i in range(SECTORS):
        if not _bit(mask, i) and _bit(mask, i - 1):
            first_gap = i
            break

    gaps: list[float] = []
    gap_start = first_gap
    for i in range(first_gap, first_gap + SECTORS):
        if _bit(mask, i) and not _bit(mask, i - 1):
            gaps.append((gap_start % SECTORS) * SECTOR_DEGREES)
            gaps.append((i % SECTORS) * SECTOR_DEGREES)
        elif not _bit(mask, i) and _bit(mask, i - 1):
            gap_start = i

    return tuple(gaps)


def drawn_arcs(gaps: Sequence[float]) -> list[tuple[float, float]]:
    """Arcs left to draw between gaps.

    Args:
        gaps: Flat (start, end) gap pairs from compute_circle_gaps

    Returns:
        (start_angle, sweep) pairs in degrees; each arc starts at the end of
        a gap and sweeps counter-clockwise to the start of the next gap.
    """
    arcs = []
    for i in range(1, len(gaps), 2):
        start = gaps[i]
        end = gaps[0] if i == len(gaps) - 1 else gaps[i + 1]
        arcs.append((start, (end - start + 360.0) % 360.0))
    return arcs


def mask_from_gaps(gaps: Sequence[float] | None) -> int:
    """Build a mask from gap angles; sectors whose start angle lies in a gap are cleared.

    Inverse of compute_circle_gaps for sector-aligned gaps.
    """
    if gaps is None:
        return FULL_CIRCLE
    if tuple(gaps) == ALL_GAP:
        return 0

    mask = FULL_CIRCLE
    for start, end in zip(gaps[::2], gaps[1::2], strict=True):
        first = round(start / SECTOR_DEGREES)
        count = round(((end - start) % 360.0) / SECTOR_DEGREES)
        for sector in range(first, first + count):
            mask &= ~(1 << (sector % SECTORS))
    return mask & FULL_CIRCLE
