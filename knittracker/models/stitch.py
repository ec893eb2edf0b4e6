"""Stitch chart symbols."""

from enum import StrEnum
from typing import Final


class StitchSymbol(StrEnum):
    """A stitch as drawn on a knitting chart."""

    KNIT = "•"
    PURL = "−"
    YARN_OVER = "○"
    KNIT_TWO_TOGETHER = "/"
    SLIP_SLIP_KNIT = "\\"
    CABLE_CROSS = "⌄"

    @property
    def description(self) -> str:
        """Human readable name for a chart legend."""
        return STITCH_DESCRIPTIONS[self]


#: Legend text for each stitch symbol.
STITCH_DESCRIPTIONS: Final[dict[StitchSymbol, str]] = {
    StitchSymbol.KNIT: "Knit stitch",
    StitchSymbol.PURL: "Purl stitch",
    StitchSymbol.YARN_OVER: "Yarn over",
    StitchSymbol.KNIT_TWO_TOGETHER: "K2tog (decrease)",
    StitchSymbol.SLIP_SLIP_KNIT: "SSK (decrease)",
    StitchSymbol.CABLE_CROSS: "Cable cross",
}
