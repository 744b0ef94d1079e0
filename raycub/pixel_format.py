"""Conversion of 0xRRGGBB colours to the pixel layout of a visual."""

from __future__ import annotations

from dataclasses import dataclass


def _mask_layout(mask: int) -> tuple[int, int]:
    """Return (shift, bit count) of the contiguous run of ones in ``mask``."""
    if mask <= 0:
        raise ValueError(f"colour mask must be a positive bit mask, got {mask!r}")
    shift = (mask & -mask).bit_length() - 1
    run = mask >> shift
    bits = (~run & (run + 1)).bit_length() - 1
    return shift, bits


@dataclass(frozen=True)
class ColorFormat:
    """Bit layout of a TrueColor visual: where each channel sits in a pixel."""

    depth: int
    red_shift: int
    red_bits: int
    green_shift: int
    green_bits: int
    blue_shift: int
    blue_bits: int

    @classmethod
    def from_masks(
        cls, depth: int, red_mask: int, green_mask: int, blue_mask: int
    ) -> "ColorFormat":
        """Build a format from a visual's depth and channel masks."""
        red_shift, red_bits = _mask_layout(red_mask)
        green_shift, green_bits = _mask_layout(green_mask)
        blue_shift, blue_bits = _mask_layout(blue_mask)
        return cls(
            depth=depth,
            red_shift=red_shift,
            red_bits=red_bits,
            green_shift=green_shift,
            green_bits=green_bits,
            blue_shift=blue_shift,
            blue_bits=blue_bits,
        )

    def convert(self, color: int) -> int:
        """Map a 0xRRGGBB colour to a pixel value for this format.

        Visuals of depth 24 or more take the colour unchanged.
        """
        if self.depth >= 24:
            return color
        red = (color >> 8) & 0xFF00
        green = color & 0xFF00
        blue = (color << 8) & 0xFF00
        return (
            ((red >> (16 - self.red_bits)) << self.red_shift)
            + ((green >> (16 - self.green_bits)) << self.green_shift)
            + ((blue >> (16 - self.blue_bits)) << self.blue_shift)
        )