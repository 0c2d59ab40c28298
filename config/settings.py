"""
Configuration settings for hobbytags.

Centralized configuration for all agents and pipeline parameters.
"""

import os
import re
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Input / output defaults
DEFAULT_CANON_PATH = DATA_ROOT / "hobby_canon.json"
DEFAULT_UNKNOWN_PATH = OUTPUT_ROOT / "unknown_hobbies.json"

# Rule-based artifact names
RECORDS_FILENAME = "IVIS23_final.json"
AREA_COUNTS_FILENAME = "hobby_area_counts.json"
AREA_RULES_FILENAME = "hobby_area_rules.json"
HOBBY_COUNTS_FILENAME = "hobby_counts.json"
AREA_RATINGS_FILENAME = "hobby_area_ratings.json"

# Survey columns (exact header text)
COL_TIMESTAMP = "Timestamp"
COL_ALIAS = (
    "What is your alias? An Alias is a secret name you give yourself. "
    "For example: Nintendo65. Please, send your alias through the assignment "
    "text field on Canvas to complete and get a grade for this assignment."
)
COL_HOBBY_RAW = "Please, tell me about yourself. What interest you? Do you have any hobbies?"
COL_COLLABORATION = "How would you rate your collaboration skills?"
COL_CODE_REPOSITORY = "How would you rate your code repository skills?"

RATING_COLUMNS = {
    "information_visualization": "How would you rate your Information Visualization skills?",
    "statistical": "How would you rate your statistical skills?",
    "mathematics": "How would you rate your mathematics skills?",
    "drawing_and_artistic": "How would you rate your drawing and artistic skills?",
    "computer_usage": "How would you rate your computer usage skills?",
    "programming": "How would you rate your programming skills?",
    "computer_graphics_programming": "How would you rate your computer graphics programming skills?",
    "human_computer_interaction_programming": "How would you rate your human-computer interaction programming skills?",
    "user_experience_evaluation": "How would you rate your user experience evaluation skills?",
    "communication": "How would you rate your communication skills?",
}

# Extra ratings merged into the IVIS23_final ratings map
EXTRA_RATING_COLUMNS = {
    "collaboration": COL_COLLABORATION,
    "code_repository": COL_CODE_REPOSITORY,
}

RATING_HEADER_PREFIX = "How would you rate your "

# Rating scales
# Ingestion scale of both rating schemas
RATING_MIN = 1.0
RATING_MAX = 10.0
RATING_DECIMALS = 1
# Dashboard presentation scale (radar chart domain)
DISPLAY_RATING_MIN = 0.0
DISPLAY_RATING_MAX = 5.0

# Tagging
TAGGER_VARIANTS = ("rule", "canon")
DEFAULT_TAGGER = "rule"
PHRASE_STRATEGIES = ("normalizer", "tokenizer")
DEFAULT_PHRASE_STRATEGY = "normalizer"
DEFAULT_MAX_KEYWORDS = 12

# Fold unresolved candidate phrases into the tag set (canon variant only)
INCLUDE_UNKNOWN_AS_TAGS = bool(
    re.match(r"^(1|true|yes)$", os.getenv("INCLUDE_UNKNOWN_AS_TAGS", ""), re.IGNORECASE)
)

# API Configuration (cluster subcommand only)
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")

# Embedding Configuration
EMBEDDING_MODEL = "models/text-embedding-004"
EMBEDDING_DIMENSIONS = 768

# Clustering
CLUSTER_K = 6
CLUSTER_MAX_ITER = 40
CLUSTER_EPSILON = 1e-6
CLUSTER_TOP_TERMS = 8
CLUSTER_REPORT_FILENAME = "hobby_raw_embedding_report.json"
CLUSTER_SIMPLE_FILENAME = "hobby_raw_clusters_simple.json"

# Logging
LOG_LEVEL = os.getenv("HOBBYTAGS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "hobbytags.log"
