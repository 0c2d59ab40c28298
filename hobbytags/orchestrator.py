"""
Pipeline Orchestrator.

Coordinates one batch run: ingestion -> tagging -> rating mapping ->
record assembly -> aggregation -> artifact writing.
"""

import logging
import os
from typing import Dict, Optional

import config.settings as settings
from hobbytags.agents.aggregation import (
    AreaRatingAggregator,
    area_count_table,
    hobby_count_table,
)
from hobbytags.agents.assembly import RecordAssembler, RunAccumulator
from hobbytags.agents.clustering import HobbyClusterAnalyzer
from hobbytags.agents.ingestion import SurveyIngestionAgent
from hobbytags.agents.ratings import RatingFieldMapper
from hobbytags.agents.tagging import build_tagger
from hobbytags.registry.canon_dictionary import CanonicalHobbyDictionary
from hobbytags.utils.embeddings import EmbeddingGenerator
from hobbytags.utils.storage import StorageManager, read_json, write_json

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Orchestrates a single-pass tagging run for one survey export.

    Variants:
    - "rule": writes IVIS23_final.json, hobby_area_counts.json,
      hobby_area_rules.json, hobby_counts.json and hobby_area_ratings.json
      into an output directory.
    - "canon": writes the cleaned record document to an output file, the
      unknown-hobby report to a second file and hobby_counts.json next to
      the document.
    """

    def __init__(
        self,
        tagger_variant: str = settings.DEFAULT_TAGGER,
        phrase_strategy: str = settings.DEFAULT_PHRASE_STRATEGY,
        max_keywords: int = settings.DEFAULT_MAX_KEYWORDS,
        canon_path: Optional[str] = None,
        include_unknown_as_tags: bool = settings.INCLUDE_UNKNOWN_AS_TAGS
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            tagger_variant: "rule" or "canon"
            phrase_strategy: Multi-word strategy of the rule tagger
            max_keywords: Keyword cap of the rule tagger
            canon_path: Canonical hobby dictionary (canon variant)
            include_unknown_as_tags: Fold unresolved phrases into tags

        Raises:
            ValueError: On invalid configuration
            OSError: If the canon dictionary cannot be read
        """
        logger.info(f"Initializing pipeline components (tagger={tagger_variant})...")

        self.tagger_variant = tagger_variant
        self.canon_path = str(canon_path or settings.DEFAULT_CANON_PATH)
        self.include_unknown_as_tags = include_unknown_as_tags

        dictionary = None
        if tagger_variant == "canon":
            dictionary = CanonicalHobbyDictionary.load(self.canon_path)

        self.tagger = build_tagger(
            tagger_variant,
            dictionary=dictionary,
            phrase_strategy=phrase_strategy,
            max_keywords=max_keywords,
            include_unknown_as_tags=include_unknown_as_tags
        )

        logger.info("Pipeline initialized successfully")

    def run(self, input_path: str, output_path: str, unknown_path: Optional[str] = None) -> Dict[str, str]:
        """
        Run the configured variant.

        Args:
            input_path: Survey CSV export
            output_path: Output directory ("rule") or cleaned JSON file ("canon")
            unknown_path: Unknown-hobby report file ("canon" only)

        Returns:
            Artifact name -> written path
        """
        if self.tagger_variant == "rule":
            return self.run_rule_based(input_path, output_path)
        return self.run_canon(input_path, output_path, unknown_path or str(settings.DEFAULT_UNKNOWN_PATH))

    def run_rule_based(self, input_path: str, output_dir: str) -> Dict[str, str]:
        """Area-bucketing run producing the IVIS23_final artifacts."""
        rating_mapper = RatingFieldMapper.ivis23_final()
        required = [
            settings.COL_TIMESTAMP,
            settings.COL_ALIAS,
            settings.COL_HOBBY_RAW,
        ] + rating_mapper.required_columns

        _, rows = SurveyIngestionAgent(required).load(input_path)

        accumulator = RunAccumulator()
        records = RecordAssembler(self.tagger, rating_mapper).assemble(rows, accumulator)
        record_dicts = [r.to_dict() for r in records]

        storage = StorageManager(output_dir)
        classifier = self.tagger.classifier
        rating_summary = AreaRatingAggregator(rating_mapper.keys).aggregate(record_dicts)

        written = {
            "records": storage.save_records(record_dicts, settings.RECORDS_FILENAME),
            "area_counts": storage.save(settings.AREA_COUNTS_FILENAME, area_count_table(accumulator.area_counts)),
            "area_rules": storage.save(settings.AREA_RULES_FILENAME, classifier.snapshot()),
            "hobby_counts": storage.save(settings.HOBBY_COUNTS_FILENAME, hobby_count_table(accumulator.hobby_counts)),
            "area_ratings": storage.save(settings.AREA_RATINGS_FILENAME, rating_summary),
        }

        logger.info(f"Rule-based run complete: {len(records)} records")
        return written

    def run_canon(self, input_path: str, output_path: str, unknown_path: str) -> Dict[str, str]:
        """
        Open-vocabulary run producing the cleaned record document, the
        unknown report and hobby_counts.json beside the document.
        """
        agent = SurveyIngestionAgent([settings.COL_HOBBY_RAW])
        headers, rows = agent.load(input_path)
        rating_mapper = RatingFieldMapper.from_headers(headers)

        accumulator = RunAccumulator()
        records = RecordAssembler(self.tagger, rating_mapper).assemble(rows, accumulator)

        document = {
            "inputFile": str(input_path),
            "totalRecords": len(records),
            "hobbyConfig": {
                "canonFile": self.canon_path,
                "unknownFile": str(unknown_path),
                "includeUnknownAsTags": self.include_unknown_as_tags,
            },
            "ratingFields": rating_mapper.field_descriptions(),
            "records": [r.to_dict() for r in records],
        }

        write_json(output_path, document)
        logger.info(f"Wrote {len(records)} records to {output_path}")
        accumulator.unknown_registry.save(unknown_path)

        # Hobby frequencies go next to the cleaned document
        counts_path = os.path.join(os.path.dirname(os.path.abspath(output_path)), settings.HOBBY_COUNTS_FILENAME)
        write_json(counts_path, hobby_count_table(accumulator.hobby_counts))
        logger.info(f"Wrote {len(accumulator.hobby_counts)} hobby counts to {counts_path}")

        return {
            "records": str(output_path),
            "unknown": str(unknown_path),
            "hobby_counts": counts_path,
        }


def run_clustering(
    records_path: str,
    output_dir: str,
    k: int = settings.CLUSTER_K,
    api_key: str = settings.GOOGLE_API_KEY,
    embedding_generator: Optional[EmbeddingGenerator] = None
) -> Optional[Dict[str, str]]:
    """
    Cluster respondents of a rule-based record file.

    Args:
        records_path: IVIS23_final.json produced by a rule-based run
        output_dir: Directory for the cluster reports
        k: Requested cluster count
        api_key: Google API key (ignored when embedding_generator is given)
        embedding_generator: Pre-built embedding provider

    Returns:
        Artifact name -> written path, or None when nothing was clustered

    Raises:
        ValueError: If the record file is not a JSON array
    """
    records = read_json(records_path)
    if not isinstance(records, list):
        raise ValueError(f"Expected a JSON array of records in {records_path}")

    if embedding_generator is None:
        embedding_generator = EmbeddingGenerator(
            api_key=api_key,
            model_name=settings.EMBEDDING_MODEL,
            embedding_dimensions=settings.EMBEDDING_DIMENSIONS
        )

    analyzer = HobbyClusterAnalyzer(embedding_generator, k=k)
    report = analyzer.analyze(records)
    if report is None:
        return None

    clusters = report["clusters"]
    report["clusters"] = [c.to_dict() for c in clusters]
    simple = [c.to_simple_dict() for c in clusters]

    storage = StorageManager(output_dir)
    return {
        "report": storage.save(settings.CLUSTER_REPORT_FILENAME, report),
        "simple": storage.save(settings.CLUSTER_SIMPLE_FILENAME, simple),
    }
