"""
Hobby text rule tables.

Pure data: ordered correction tables, stopword sets and the hobby-area
rule table. Control flow lives in the agents; extending a table here
must never require touching them.
"""

# Ordered (pattern, replacement) pairs applied to normalized text.
# Earlier patterns take precedence.
PHRASE_CORRECTIONS = [
    (r"3d\s+modelling", "3dmodeling"),
    (r"3d\s+modeling", "3dmodeling"),
    (r"3d\s+printing", "3dprinting"),
    (r"video\s+games?", "videogame"),
    (r"board\s+games?", "boardgame"),
    (r"counter\s*strike", "counterstrike"),
    (r"working\s+out", "workout"),
    (r"data\s+analysis", "dataanalysis"),
    (r"television\s+series", "series"),
    (r"tv\s+series", "series"),
]

# Multi-word phrase -> canonical token, resolved at the tokenizer stage.
# Covers the same idioms as PHRASE_CORRECTIONS for the tokenizer strategy.
MULTIWORD_CANONICAL = {
    "video game": "videogame",
    "video games": "videogame",
    "board game": "boardgame",
    "board games": "boardgame",
    "counter strike": "counterstrike",
    "data analysis": "dataanalysis",
    "3d modeling": "3dmodeling",
    "3d modelling": "3dmodeling",
    "3d printing": "3dprinting",
    "working out": "workout",
    "television series": "series",
    "tv series": "series",
}

# Single-token spelling / plural fixes.
TOKEN_CORRECTIONS = {
    "analysi": "analysis",
    "bas": "bass",
    "ches": "chess",
    "films": "film",
    "games": "game",
    "modelling": "modeling",
    "movies": "movie",
    "novels": "novel",
    "photos": "photo",
    "programing": "programming",
    "sports": "sport",
    "studie": "study",
    "thirtie": "thirties",
    "traveling": "travel",
    "travelling": "travel",
    "videogames": "videogame",
}

STOP_WORDS = frozenset([
    "a", "about", "above", "after", "all", "also", "am", "among", "an", "and",
    "apart", "are", "as", "at", "be", "been", "before", "being", "below",
    "between", "both", "but", "by", "continue", "did", "do", "does", "doing",
    "during", "else", "enjoy", "especially", "favorite", "finish", "for",
    "from", "getting", "going", "had", "has", "have", "having", "he", "her",
    "here", "hers", "herself", "him", "himself", "his", "hobbies", "hobby",
    "how", "i", "if", "in", "interest", "interested", "into", "is", "it",
    "its", "itself", "just", "kind", "learning", "like", "love", "main",
    "making", "me", "mine", "most", "mostly", "my", "myself", "new", "of",
    "often", "on", "onto", "or", "other", "otherwise", "our", "ours",
    "ourselves", "over", "play", "playing", "please", "ready", "really",
    "she", "so", "sometimes", "start", "studying", "stuff", "tell", "that",
    "the", "their", "theirs", "them", "themselves", "then", "there", "these",
    "they", "thing", "things", "this", "those", "through", "to", "too",
    "trying", "under", "us", "usual", "usually", "very", "was", "watching",
    "we", "well", "were", "what", "when", "while", "who", "whole", "why",
    "with", "working", "you", "your", "yours", "yourself", "yourselves",
])

NOISE_WORDS = frozenset([
    "current", "currently", "different", "engineer", "family", "first",
    "friend", "get", "girl", "goal", "hard", "impossible", "kth", "life",
    "lot", "not", "plan", "pretty", "question", "science", "side",
    "software", "student", "study", "time", "toward", "visual", "which",
    "year", "zone",
])

# Ordered (area, keywords) pairs. Every matching rule applies.
AREA_RULES = [
    ("sports_outdoors", [
        "badminton", "basketball", "bike", "bouldering", "climb", "climbing",
        "cycling", "dance", "fitness", "football", "gym", "handball", "hike",
        "hiking", "jogging", "kendo", "run", "running", "sailing", "skate",
        "ski", "skiing", "soccer", "sport", "swim", "swimming", "tennis",
        "workout", "yoga",
    ]),
    ("arts_media", [
        "anime", "art", "band", "choir", "cinema", "design", "draw",
        "drawing", "film", "guitar", "illustration", "movie", "movies",
        "music", "paint", "painting", "photo", "photography", "piano",
        "series", "sing", "singing", "sketch", "ukulele",
    ]),
    ("games", [
        "boardgame", "chess", "counterstrike", "dnd", "game", "gaming",
        "pokemon", "videogame",
    ]),
    ("tech_making", [
        "3d", "3dmodeling", "3dprinting", "blender", "code", "coding",
        "dataanalysis", "electronics", "maker", "program", "programming",
        "rendering", "robot", "rust", "unity", "wasm",
    ]),
    ("reading_writing", [
        "book", "books", "fiction", "literature", "novel", "poem", "poetry",
        "read", "reading", "write", "writing",
    ]),
    ("travel", ["travel", "trip"]),
    ("food", [
        "bake", "baking", "bartending", "beer", "cocktail", "coffee", "cook",
        "cooking", "food", "tea",
    ]),
    ("languages_culture", [
        "culture", "japanese", "language", "languages", "swedish",
    ]),
]

DEFAULT_AREA = "other"

# Generic term dropped when its specific form is present.
SPECIFICITY_CONFLICTS = [
    ("videogame", "game"),
]

# Open-vocabulary tables

NOISE_PHRASES = [
    "i like",
    "i love",
    "i enjoy",
    "interested in",
    "my hobbies are",
    "in my free time",
]

CANDIDATE_STOPWORDS = frozenset([
    "i", "my", "and", "or", "like", "love", "enjoy", "interested", "hobby",
    "hobbies", "to", "in", "on", "at", "for", "with", "the", "a", "an", "of",
])

INVALID_VALUES = frozenset(["none", "no", "n a", "na", "-", "nothing", "null"])

UNKNOWN_REJECT_WORDS = frozenset([
    "am", "also", "afterwards", "both", "well", "main", "student", "year",
    "children", "married", "especially", "such", "who", "that", "which",
])

UNKNOWN_REJECT_PHRASES = [
    "as well as",
    "such as",
    "i am",
    "i m",
]

# Display labels for compound area names.
AREA_LABELS = {
    "arts_media": "Arts & Media",
    "tech_making": "Tech & Making",
    "sports_outdoors": "Sports & Outdoors",
    "reading_writing": "Reading & Writing",
    "languages_culture": "Languages & Culture",
}
