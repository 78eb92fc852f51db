"""Discourse unit splitting and boundary correction.

The oracle's unit texts are not trusted: whitespace gets normalized and
punctuation rewritten. Only the first word of each unit and its tag are used.
Each first word is located in the paragraph, and the paragraph is sliced at
those offsets so every unit is an exact substring.
"""

from __future__ import annotations

from edusync.errors import BoundaryNotFoundError, EmptyInputError, SegmentationDriftError
from edusync.models.discourse import DiscourseUnit, UnitSplitResult
from edusync.oracle.base import SegmentationOracle
from edusync.segmentation.boundary import find_token, first_token
from edusync.segmentation.verify import verified_attempts, verify_reconstruction
from edusync.utils.progress import log_step

STAGE = "units"


def correct_unit_boundaries(
    paragraph: str,
    proposed: UnitSplitResult,
) -> list[DiscourseUnit]:
    """Re-slice the oracle's units so their contents are exact paragraph substrings.

    Units without any word character are dropped; their text ends up in the
    preceding unit. The first kept unit always starts at offset 0 and the last
    one runs to the end of the paragraph.

    Raises BoundaryNotFoundError when a unit's first word is not in the
    remaining paragraph text.
    """
    starts: list[int] = []
    tags = []
    cursor = 0

    for position, unit in enumerate(proposed.units):
        token = first_token(unit.content)
        if not token:
            continue

        offset = find_token(paragraph, token, cursor)
        if offset is None:
            raise BoundaryNotFoundError(
                f"Unit {position + 1} not found in paragraph: first word {token!r} "
                f"after offset {cursor} (unit text {unit.content[:60]!r})",
                token=token,
                cursor=cursor,
                unit_position=position,
            )
        starts.append(offset)
        tags.append(unit.tag)
        cursor = offset + len(token)

    if not starts:
        # punctuation-only paragraph: keep it whole under the first proposed tag
        starts, tags = [0], [proposed.units[0].tag]

    starts[0] = 0
    ends = starts[1:] + [len(paragraph)]

    return [
        DiscourseUnit(content=paragraph[start:end], tag=tag)
        for start, end, tag in zip(starts, ends, tags)
    ]


def split_units(
    paragraph: str,
    oracle: SegmentationOracle,
    *,
    max_attempts: int = 3,
) -> list[DiscourseUnit]:
    """Split one paragraph into exact, tagged discourse units.

    The first attempt asks the oracle for medium effort, retries ask for
    high effort. ``global_index`` is left unset.
    """
    if not paragraph:
        raise EmptyInputError("Cannot split an empty paragraph", stage=STAGE)

    try:
        for attempt in verified_attempts(STAGE, max_attempts):
            with attempt:
                effort = "high" if attempt.retry_state.attempt_number > 1 else "medium"
                proposed = oracle.split_units(paragraph, effort=effort)
                if not proposed.units:
                    raise SegmentationDriftError(
                        "Oracle returned no units",
                        stage=STAGE,
                        detail="no units returned for a non-empty paragraph",
                        expected_length=len(paragraph),
                        actual_length=0,
                    )
                try:
                    units = correct_unit_boundaries(paragraph, proposed)
                except BoundaryNotFoundError as e:
                    raise SegmentationDriftError(
                        str(e), stage=STAGE, detail=str(e)
                    ) from e
                verify_reconstruction(STAGE, paragraph, [u.content for u in units])
    except SegmentationDriftError as e:
        raise SegmentationDriftError(
            f"Unit split failed after {max_attempts} attempt(s): {e.detail}",
            stage=STAGE,
            detail=e.detail,
            expected_length=e.expected_length,
            actual_length=e.actual_length,
        ) from e

    log_step("Units", f"{len(units)} unit(s) from paragraph of {len(paragraph)} chars")
    return units
