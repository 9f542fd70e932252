"""
Shared regex patterns for whiteboard parsing.

The movement and score passes both look at the same grid lines and skip
each other's territory, so the shapes they disagree about live here.
"""

import re

# Column separator inserted by the text-extraction step
DEFAULT_DELIMITER = "|"

# Bare structural words that head a section rather than carry data
HEADER_PATTERN = re.compile(r'^(workout|score|results?|rounds?|sets?|time|reps?):?$', re.IGNORECASE)

# Descriptive keywords: "Rest 1:00", "Repeat", "Then ...", "And ..."
DESCRIPTIVE_PATTERN = re.compile(r'^(rest|repeat|then|and)\b\s*(.*)', re.IGNORECASE)
DESCRIPTIVE_KEYWORD_PATTERN = re.compile(r'^(rest|repeat|then|and)$', re.IGNORECASE)
INSTRUCTION_PREFIX_PATTERN = re.compile(r'^@(\s|$)')

# Amount grammar: "21", "21-15-9", "5x5", "5 x 5"
AMOUNT_PATTERN = re.compile(r'^(\d+(?:-\d+)*|\d+\s*[xX]\s*\d+)$')
AMOUNT_PREFIX = r'(\d+\s*[xX]\s*\d+|\d+(?:-\d+)*)'  # "5 x 5" is one amount, not "5"
UNIT_TOKENS = r'(\d+|lbs|kg|cal|m|ft|in|meters?|feet?)'

# Free-text movement lines (no delimiters): "21 Hang Power Clean 135", "50 Double Unders"
LEGACY_MOVEMENT_PATTERNS = [
    re.compile(r'^' + AMOUNT_PREFIX + r'\s+(.+?)\s+' + UNIT_TOKENS + r'$', re.IGNORECASE),
    re.compile(r'^' + AMOUNT_PREFIX + r'\s+(.+)$', re.IGNORECASE),
]
TRAILING_UNIT_PATTERN = re.compile(r'\s+' + UNIT_TOKENS + r'$', re.IGNORECASE)

# Times and dates
CLOCK_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')
DATE_PATTERN = re.compile(r'\d{1,2}/\d{1,2}/\d{2,4}')
REST_RATIO_PATTERN = re.compile(r'rest\s+1:1(?!\d)', re.IGNORECASE)

# Score shapes
NUMBER_PLUS_NUMBER_PATTERN = re.compile(r'\d+\s*\+\s*\d+')
ROUNDS_PLUS_REPS_PATTERN = re.compile(r'rounds?\s*\+\s*\d+\s*reps?', re.IGNORECASE)
BARE_COUNT_PATTERN = re.compile(r'^\d+\s*(rounds?|rds?|reps?)$', re.IGNORECASE)
WEIGHT_LINE_PATTERN = re.compile(r'^(\d+)\s*(lbs?|kg)?$', re.IGNORECASE)
WEIGHT_UNIT_PATTERN = re.compile(r'^(lbs?|kg|#|pounds?|kilos?)$', re.IGNORECASE)
WEIGHT_SHAPED_PATTERN = re.compile(r'^\d+(?:\.\d+)?\s*(lbs?|kg)$', re.IGNORECASE)
PROSE_REPS_PATTERN = re.compile(
    r'^(\d+)\s*(rounds?|rds?)?\s*(?:\+\s*(\d+)\s*(?:reps?)?)?\s*(reps?)?$',
    re.IGNORECASE
)  # "8 + 25", "3 rounds + 15 reps", "25 reps", "8 rounds"
START_STOP_PATTERN = re.compile(
    r'start:\s*(\d{1,2}):?(\d{2})\s*,\s*stop:\s*(\d{1,2}):?(\d{2})',
    re.IGNORECASE
)  # "Start: 0:00, Stop: 1:13"
RESULT_LABEL_PATTERN = re.compile(
    r'^(time|score|total|results?|finish(?:\s*time)?|weight)\s*:?\s*(?=\d)',
    re.IGNORECASE
)  # "Time: 12:34", "Total 250"

# "Round 2: 2:08", "Set 1 4:30"
ROUND_LABEL_PATTERN = re.compile(r'^(round|set)\s+(\d+):?\s*(.*)$', re.IGNORECASE)
ROUND_LABEL_COLUMN_PATTERN = re.compile(r'^(round|set)\s*(\d+):?$', re.IGNORECASE)
ROUND_WORD_PATTERN = re.compile(r'^(round|set)$', re.IGNORECASE)
LABEL_NUMBER_PATTERN = re.compile(r'^(\d+):?$')
ROUND_LABEL_PREFIX_PATTERN = re.compile(r'^(round|set)\s*\d+\b', re.IGNORECASE)

# Score-side view of a movement line: "30 | DU", "200W | Bike erg", "21-15-9 | Thrusters"
MOVEMENT_AMOUNT_COLUMN_PATTERN = re.compile(r'^(\d+(?:-\d+)*[a-zA-Z]*|\d+\s*[xX]\s*\d+)$')
SHORT_UNIT_COLUMN_PATTERN = re.compile(r'^(cal|lbs?|kg|min|sec|reps?|rounds?|rds?)$', re.IGNORECASE)
INTEGER_PATTERN = re.compile(r'^\d+$')
LEADING_WORD_PATTERN = re.compile(r'^[A-Za-z]')
PROSE_MOVEMENT_PATTERN = re.compile(r'^' + AMOUNT_PREFIX + r'\s+[A-Za-z]')

# Attached letters on a number ("200W", "W200") mean it is not a time
ATTACHED_LETTERS_PATTERNS = (re.compile(r'^\d+[a-zA-Z]'), re.compile(r'[a-zA-Z]\d+$'))

# Title metadata
TIME_CAP_PATTERN = re.compile(r'(\d+)\s*(?:min|minute|m)\s*(?:cap|time\s*cap)', re.IGNORECASE)
EMOM_CODE_PATTERN = re.compile(r'E(\d+)MOM', re.IGNORECASE)
EMOM_MINUTES_PATTERN = re.compile(r'(\d+)\s*(?:min|minute|m)\s*emom', re.IGNORECASE)
SETS_INFO_PATTERN = re.compile(r'(\d+)\s*sets?\s*,?\s*(\d+)\s*(?:rds?|rounds?)', re.IGNORECASE)
TYPE_CODE_TITLE_PATTERN = re.compile(r'^(E\d+MOM|AMRAP|EMOM|CHIPPER)$', re.IGNORECASE)
