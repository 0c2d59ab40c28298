"""
Record Assembler.

Combines tagger and rating mapper output into one record per survey row,
assigning sequential ids in file order and updating the run accumulator.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Union

import config.settings as settings
from hobbytags.agents.normalization import clean_about
from hobbytags.agents.ratings import RatingFieldMapper
from hobbytags.agents.tagging import HobbyTagger
from hobbytags.models.survey import AreaRecord, IntroRecord, SurveyRow
from hobbytags.registry.unknown_registry import UnknownHobbyRegistry

logger = logging.getLogger(__name__)


YEAR_PATTERN = re.compile(r"(19|20)\d{2}")


def year_from_timestamp(timestamp: str) -> str:
    """First 19xx/20xx year in a timestamp string, or ""."""
    if not timestamp:
        return ""
    match = YEAR_PATTERN.search(str(timestamp))
    return match.group(0) if match else ""


@dataclass
class RunAccumulator:
    """
    Mutable tallies scoped to one pipeline invocation.
    Counters only ever increase.
    """
    area_counts: Counter = field(default_factory=Counter)
    hobby_counts: Counter = field(default_factory=Counter)
    unknown_registry: UnknownHobbyRegistry = field(default_factory=UnknownHobbyRegistry)
    rows_read: int = 0
    rows_skipped: int = 0


class RecordAssembler:
    """
    Builds output records for the configured tagger variant:
    AreaRecord for "rule", IntroRecord for "canon".
    """

    def __init__(
        self,
        tagger: HobbyTagger,
        rating_mapper: RatingFieldMapper,
        hobby_column: str = settings.COL_HOBBY_RAW,
        alias_column: str = settings.COL_ALIAS,
        timestamp_column: str = settings.COL_TIMESTAMP
    ):
        """
        Initialize assembler.

        Args:
            tagger: Active hobby tagger
            rating_mapper: Rating mapper for the matching schema
            hobby_column: Header of the free-text hobby question
            alias_column: Header of the alias question
            timestamp_column: Header of the timestamp column
        """
        self.tagger = tagger
        self.rating_mapper = rating_mapper
        self.hobby_column = hobby_column
        self.alias_column = alias_column
        self.timestamp_column = timestamp_column

    def assemble(
        self,
        rows: List[SurveyRow],
        accumulator: RunAccumulator
    ) -> List[Union[AreaRecord, IntroRecord]]:
        """
        Assemble records for all rows, in file order.

        Entirely blank rows are skipped and do not consume an id.

        Args:
            rows: Survey rows as ingested
            accumulator: Run-scoped tallies, updated in place

        Returns:
            Records with ids 1..N
        """
        records = []

        for row in rows:
            accumulator.rows_read += 1
            if row.is_blank():
                accumulator.rows_skipped += 1
                logger.debug(f"Skipping blank row {row.row_number}")
                continue

            record_id = len(records) + 1
            if self.tagger.variant == "rule":
                record = self._build_area_record(row, record_id, accumulator)
            else:
                record = self._build_intro_record(row, record_id, accumulator)
            records.append(record)

        logger.info(
            f"Assembled {len(records)} records "
            f"({accumulator.rows_skipped} blank rows skipped)"
        )
        return records

    def _build_area_record(self, row: SurveyRow, record_id: int, accumulator: RunAccumulator) -> AreaRecord:
        raw = row.get(self.hobby_column)
        result = self.tagger.tag(raw, accumulator.unknown_registry)

        accumulator.area_counts.update(result.areas)
        accumulator.hobby_counts.update(result.tags)

        if result.areas == [self.tagger.classifier.default_area] and raw.strip():
            logger.debug(f"Row {row.row_number}: no hobby area matched")

        return AreaRecord(
            id=record_id,
            alias=row.get(self.alias_column),
            time_year=year_from_timestamp(row.get(self.timestamp_column)),
            hobby_raw=raw,
            hobby=result.tags,
            hobby_area=result.areas,
            ratings=self.rating_mapper.map_row(row),
        )

    def _build_intro_record(self, row: SurveyRow, record_id: int, accumulator: RunAccumulator) -> IntroRecord:
        about = clean_about(row.get(self.hobby_column))
        result = self.tagger.tag(about, accumulator.unknown_registry)

        accumulator.hobby_counts.update(result.tags)

        return IntroRecord(
            id=record_id,
            alias=row.get(self.alias_column).strip(),
            about=about,
            hobbies=result.tags,
            ratings=self.rating_mapper.map_row(row),
        )
