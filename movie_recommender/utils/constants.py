"""
Shared constants: storage keys, questionnaire option sets and the default
profile used by the "surprise me" flow.

The questionnaire option strings are persisted verbatim inside the
preference profile and echoed into the Gemini prompt, so changing any of
them changes both the stored data and the prompt text.
"""

STORAGE_KEYS = {
    'PREFERENCES': 'movie-recommender-preferences',
    'WATCH_HISTORY': 'movie-recommender-watch-history',
}

# Suffix for the copy of an unreadable blob kept for inspection
CORRUPT_KEY_SUFFIX = '.corrupt'

# OMDb uses this sentinel for "no value"
OMDB_NOT_AVAILABLE = 'N/A'

MIN_MOVIE_YEAR = 1900
MIN_RATING = 0
MAX_RATING = 10
HIGHLY_RATED_THRESHOLD = 8

GENRE_OPTIONS = [
    'Action', 'Adventure', 'Animation', 'Biography', 'Comedy', 'Crime',
    'Documentary', 'Drama', 'Family', 'Fantasy', 'Film-Noir', 'History',
    'Horror', 'Music', 'Mystery', 'Romance', 'Sci-Fi', 'Sport',
    'Thriller', 'War', 'Western',
]

ERA_OPTIONS = [
    'Classic (pre-1970s)',
    '70s-80s Golden Age',
    '90s-2000s',
    'Recent (2010s-present)',
    'I enjoy movies from all eras',
]

MOOD_OPTIONS = [
    'Light-hearted and fun',
    'Intense and thrilling',
    'Thought-provoking and deep',
    'Romantic and emotional',
    'Dark and mysterious',
    'Inspiring and uplifting',
    'Funny and comedic',
    'Action-packed and exciting',
]

CONTENT_LEVEL_OPTIONS = [
    'Family-friendly only',
    'Mild content (PG-13 level)',
    'Moderate content (R level)',
    'Any content level is fine',
]

WATCH_TIME_OPTIONS = [
    'Short (under 90 minutes)',
    'Standard (90-120 minutes)',
    'Long (2-3 hours)',
    'Epic (3+ hours)',
    "Length doesn't matter",
]

RATING_PREFERENCE_OPTIONS = [
    'Only highly-rated movies (8+ stars)',
    'Well-rated movies (7+ stars)',
    'Open to hidden gems (6+ stars)',
    "I don't care about ratings",
]

SCORE_PREFERENCE_OPTIONS = [
    'Trust critics more',
    'Trust audience more',
    'Balanced approach',
    "I don't pay attention to scores",
]

QUESTIONNAIRE_STEPS = [
    {
        'id': 'genres',
        'title': 'What genres do you enjoy?',
        'question': 'Select all the genres you like (you can choose multiple):',
        'type': 'multiple',
        'options': GENRE_OPTIONS,
        'required': True,
    },
    {
        'id': 'era',
        'title': 'What movie era appeals to you?',
        'question': 'Choose your preferred time period for movies:',
        'type': 'single',
        'options': ERA_OPTIONS,
        'required': True,
    },
    {
        'id': 'mood',
        'title': 'What mood are you in?',
        'question': 'Select the types of movies that match your current mood (choose multiple):',
        'type': 'multiple',
        'options': MOOD_OPTIONS,
        'required': True,
    },
    {
        'id': 'contentLevel',
        'title': 'What content level do you prefer?',
        'question': 'How comfortable are you with mature content?',
        'type': 'single',
        'options': CONTENT_LEVEL_OPTIONS,
        'required': True,
    },
    {
        'id': 'watchTime',
        'title': 'How much time do you have?',
        'question': "What's your preferred movie length?",
        'type': 'single',
        'options': WATCH_TIME_OPTIONS,
        'required': True,
    },
    {
        'id': 'ratingPreference',
        'title': 'What about movie ratings?',
        'question': 'Do you prefer highly-rated movies or are you open to hidden gems?',
        'type': 'single',
        'options': RATING_PREFERENCE_OPTIONS,
        'required': True,
    },
    {
        'id': 'scorePreference',
        'title': 'Critics vs Audience?',
        'question': 'Whose opinion do you trust more for movie recommendations?',
        'type': 'single',
        'options': SCORE_PREFERENCE_OPTIONS,
        'required': True,
    },
]

# Broad profile for "surprise me": no questionnaire needed
SURPRISE_PREFERENCES = {
    'genres': ['Action', 'Comedy', 'Drama', 'Sci-Fi', 'Thriller'],
    'era': 'I enjoy movies from all eras',
    'mood': ['Light-hearted and fun', 'Intense and thrilling', 'Thought-provoking and deep'],
    'contentLevel': 'Any content level is fine',
    'watchTime': "Length doesn't matter",
    'ratingPreference': 'Open to hidden gems (6+ stars)',
    'scorePreference': 'Balanced approach',
}
