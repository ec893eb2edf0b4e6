"""Example projects shown on a first run."""

from knittracker.models.project import Project
from knittracker.models.section import Section


def sample_projects() -> list[Project]:
    """
    Build the example projects loaded when storage holds nothing.

    Fresh identifiers and timestamps are generated on every call.

    Returns:
        The example projects, in display order

    """
    cozy_sweater = Project(
        name="Cozy Cable Sweater",
        description="Winter Collection 2025",
        sections=[
            Section(
                name="Back",
                current_row=15,
                total_rows=40,
                pattern_instructions=(
                    "Cast on 80 sts. Work K2, P2 ribbing for 2 inches, then "
                    "stockinette stitch until piece measures 22 inches from "
                    "cast on edge."
                ),
                stitch_count=80,
            ),
            Section(
                name="Front",
                current_row=12,
                total_rows=40,
                pattern_instructions=(
                    "Work same as back until piece measures 20 inches. Begin "
                    "neck shaping: bind off center 20 sts, then work each side "
                    "separately."
                ),
                stitch_count=80,
            ),
            Section(
                name="Sleeves",
                current_row=26,
                total_rows=40,
                pattern_instructions=(
                    "Row 26 (Cable Cross): K2, *slip 2 to cable needle and hold "
                    "in front, K2, K2 from cable needle, P2* repeat to last "
                    "2 sts, K2"
                ),
                stitch_count=60,
            ),
            Section(
                name="Merge & Yoke",
                current_row=0,
                total_rows=20,
                pattern_instructions=(
                    "Join all pieces. Work in the round, decreasing evenly to "
                    "shape yoke."
                ),
                stitch_count=220,
            ),
        ],
        notes="Using Cascade 220 yarn, color Heather. Size 8 needles.",
    )

    striped_scarf = Project(
        name="Striped Scarf",
        description="Gift for Mom",
        sections=[
            Section(
                name="Main Body",
                current_row=85,
                total_rows=100,
                pattern_instructions=(
                    "Continue stripe pattern: *6 rows color A, 6 rows color B* "
                    "repeat"
                ),
                stitch_count=40,
            ),
        ],
        notes="Colors: Navy and Cream",
    )

    baby_blanket = Project(
        name="Baby Blanket",
        description="For Sarah's shower",
        sections=[
            Section(
                name="Main Panel",
                current_row=18,
                total_rows=100,
                pattern_instructions=(
                    "Garter stitch throughout. Work until square "
                    "(approximately 30 inches)."
                ),
                stitch_count=120,
            ),
        ],
        notes="Soft yellow yarn, washable",
    )

    return [cozy_sweater, striped_scarf, baby_blanket]
