"""
hobbytags - Survey Hobby Tagging Pipeline

CLI entry point for the tagging run and the clustering utility.
"""

import argparse
import logging
import sys

from hobbytags.orchestrator import PipelineOrchestrator, run_clustering
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="hobbytags - survey hobby text tagging",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Rule-based area tagging into an output directory
  python main.py tag data/IVIS23.csv output/

  # Canonical dictionary tagging with an unknown-hobby report
  python main.py tag data/IVIS23.csv output/IVIS23.cleaned.json \\
                 data/hobby_canon.json output/unknown_hobbies.json --tagger canon

  # Cluster respondents of a rule-based run (needs GOOGLE_API_KEY)
  python main.py cluster output/IVIS23_final.json --k 6

Set INCLUDE_UNKNOWN_AS_TAGS=1 to keep unresolved hobby phrases as tags.
        """
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    tag = subparsers.add_parser("tag", help="Tag survey hobby text")
    tag.add_argument("input", help="Survey CSV export")
    tag.add_argument("output", help="Output directory (rule) or cleaned JSON file (canon)")
    tag.add_argument(
        "canon",
        nargs="?",
        default=str(settings.DEFAULT_CANON_PATH),
        help=f"Canonical hobby dictionary (default: {settings.DEFAULT_CANON_PATH})"
    )
    tag.add_argument(
        "unknown",
        nargs="?",
        default=str(settings.DEFAULT_UNKNOWN_PATH),
        help=f"Unknown-hobby report (default: {settings.DEFAULT_UNKNOWN_PATH})"
    )
    tag.add_argument(
        "--tagger",
        default=settings.DEFAULT_TAGGER,
        choices=settings.TAGGER_VARIANTS,
        help=f"Tagging variant (default: {settings.DEFAULT_TAGGER})"
    )
    tag.add_argument(
        "--phrase-strategy",
        default=settings.DEFAULT_PHRASE_STRATEGY,
        choices=settings.PHRASE_STRATEGIES,
        help="Where multi-word phrases are resolved (rule tagger only)"
    )
    tag.add_argument(
        "--max-keywords",
        type=int,
        default=settings.DEFAULT_MAX_KEYWORDS,
        help=f"Keyword cap per respondent (default: {settings.DEFAULT_MAX_KEYWORDS})"
    )

    cluster = subparsers.add_parser("cluster", help="Cluster respondents by hobby embeddings")
    cluster.add_argument("records", help="IVIS23_final.json from a rule-based run")
    cluster.add_argument(
        "--k",
        type=int,
        default=settings.CLUSTER_K,
        help=f"Number of clusters (default: {settings.CLUSTER_K}; values < 2 use the default)"
    )
    cluster.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Directory for cluster reports (default: {settings.OUTPUT_ROOT})"
    )

    return parser


def run_tag(args) -> None:
    orchestrator = PipelineOrchestrator(
        tagger_variant=args.tagger,
        phrase_strategy=args.phrase_strategy,
        max_keywords=args.max_keywords,
        canon_path=args.canon,
        include_unknown_as_tags=settings.INCLUDE_UNKNOWN_AS_TAGS
    )
    written = orchestrator.run(args.input, args.output, args.unknown)
    for path in written.values():
        print(f"Wrote: {path}")


def run_cluster(args) -> None:
    if not settings.GOOGLE_API_KEY:
        raise ValueError(
            "GOOGLE_API_KEY environment variable not set. "
            "Please set it before running the cluster command."
        )

    written = run_clustering(args.records, args.output_dir, k=args.k)
    if written is None:
        print("No hobby rows found.")
        return
    for path in written.values():
        print(f"Wrote: {path}")


def main(argv=None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        if args.command == "tag":
            run_tag(args)
        else:
            run_cluster(args)

        logger.info("hobbytags completed successfully")
        return 0

    except KeyboardInterrupt:
        logger.warning("Run interrupted by user")
        print("Run interrupted", file=sys.stderr)
        return 1

    except Exception as e:
        logger.error(f"Run failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
