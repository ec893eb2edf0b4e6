"""
Pattern chart rendering.

The chart is a fixed window of :attr:`PatternGrid.ROWS` rows.  The project's
row counter is unbounded, so it is folded onto that window with
``current_row % ROWS``: row 26 of a section lights up chart row 2.  Symbols
come from a short repeating palette indexed by ``(row + col)``, giving a
diagonal texture that is the same every time for the same inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Final

from knittracker.models.stitch import StitchSymbol

#: Repeating stitch sequence used to fill the chart.
PALETTE: Final[tuple[StitchSymbol, ...]] = (
    StitchSymbol.KNIT,
    StitchSymbol.PURL,
    StitchSymbol.YARN_OVER,
    StitchSymbol.KNIT,
    StitchSymbol.KNIT,
    StitchSymbol.PURL,
)


@dataclass(frozen=True)
class GridCell:
    """One chart cell."""

    #: Zero-based chart row.
    row: int
    #: Zero-based column.
    col: int
    #: The stitch drawn in the cell.
    symbol: StitchSymbol
    #: Whether the cell is on the row being worked.
    highlighted: bool


@dataclass(frozen=True)
class RowLabel:
    """A 1-based row number drawn at the chart's right edge."""

    #: Zero-based chart row the label belongs to.
    row: int
    #: The label text.
    text: str


@dataclass(frozen=True)
class PatternGrid:
    """
    A rendered chart: every cell in row-major order plus one label per row.
    """

    #: Number of rows in the chart window.
    ROWS: ClassVar[int] = 8
    #: Default width and height of a cell, in display units.
    CELL_SIZE: ClassVar[int] = 20

    #: The row counter the chart was rendered for.
    current_row: int
    #: Number of columns that fit the viewport.
    columns: int
    #: The chart row that is highlighted.
    highlighted_row: int
    #: The cells, row by row.
    cells: tuple[GridCell, ...]
    #: The row labels, top to bottom.
    labels: tuple[RowLabel, ...]

    def row_cells(self, row: int) -> tuple[GridCell, ...]:
        """The cells of one chart row, left to right."""
        start = row * self.columns
        return self.cells[start : start + self.columns]

    def row_symbols(self, row: int) -> str:
        """The symbols of one chart row as a string."""
        return "".join(cell.symbol for cell in self.row_cells(row))

    def as_text(self) -> str:
        """
        Plain text rendering: one line per row, the highlighted row marked
        with ``>``, the row number at the end of each line.
        """
        lines = []
        for label in self.labels:
            marker = ">" if label.row == self.highlighted_row else " "
            symbols = " ".join(cell.symbol for cell in self.row_cells(label.row))
            parts = (marker, symbols, f"{label.text:>2}")
            lines.append(" ".join(part for part in parts if part))
        return "\n".join(lines)


def column_count(viewport_width: float, cell_size: float = PatternGrid.CELL_SIZE) -> int:
    """
    Number of whole cells that fit across ``viewport_width``.

    Args:
        viewport_width: Available width; zero or negative gives no columns
        cell_size: Width of one cell

    Raises:
        ValueError: if ``cell_size`` is not positive, or either value is not
            finite

    Returns:
        Column count

    """
    if not math.isfinite(cell_size) or cell_size <= 0:
        msg = f"cell_size must be a positive number, not {cell_size!r}"
        raise ValueError(msg)
    if not math.isfinite(viewport_width):
        msg = f"viewport_width must be finite, not {viewport_width!r}"
        raise ValueError(msg)
    if viewport_width <= 0:
        return 0
    return int(viewport_width // cell_size)


def symbol_for_cell(row: int, col: int) -> StitchSymbol:
    """The palette symbol for the cell at ``(row, col)``."""
    return PALETTE[(row + col) % len(PALETTE)]


def render_grid(
    current_row: int,
    viewport_width: float,
    cell_size: float = PatternGrid.CELL_SIZE,
) -> PatternGrid:
    """
    Render the chart for a section's row counter.

    Args:
        current_row: The section's current row; any integer
        viewport_width: Horizontal space available for the chart

    Keyword Args:
        cell_size: Width of one cell

    Returns:
        The rendered :class:`PatternGrid`

    """
    columns = column_count(viewport_width, cell_size)
    highlighted_row = current_row % PatternGrid.ROWS
    cells = tuple(
        GridCell(
            row=row,
            col=col,
            symbol=symbol_for_cell(row, col),
            highlighted=row == highlighted_row,
        )
        for row in range(PatternGrid.ROWS)
        for col in range(columns)
    )
    labels = tuple(
        RowLabel(row=row, text=str(row + 1)) for row in range(PatternGrid.ROWS)
    )
    return PatternGrid(
        current_row=current_row,
        columns=columns,
        highlighted_row=highlighted_row,
        cells=cells,
        labels=labels,
    )
