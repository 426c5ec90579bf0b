"""**********************************************************************************
 * Title: constants.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * Static data constants for the Star Battle deduction engine. This module is
 * the single source of truth for cell states, the star density, scoring tiers,
 * rendering symbols and the SBN conversion tables. It has no dependencies on
 * other package modules to prevent circular imports.
 **********************************************************************************"""

# --- CELL STATES ---
# Values match the player-grid codes of the SBN annotation format
# (empty, star, secondary mark), so a deduced grid can be exported directly.
STATE_BLANK = 0
STATE_STAR = 1
STATE_FILLED = 2

STARS_PER_UNIT = 2

# --- RENDERING ---
SYMBOL_STAR = 'X'
SYMBOL_FILLED = '#'
RESET = "\033[0m"
UNIFIED_COLORS_BG_TERMINAL = [
    ("Bright Red", (255, 204, 204), "\033[48;2;255;204;204m\033[38;2;0;0;0m"),
    ("Bright Green", (204, 255, 204), "\033[48;2;204;255;204m\033[38;2;0;0;0m"),
    ("Bright Yellow", (255, 255, 204), "\033[48;2;255;255;204m\033[38;2;0;0;0m"),
    ("Bright Blue", (204, 229, 255), "\033[48;2;204;229;255m\033[38;2;0;0;0m"),
    ("Bright Magenta", (255, 204, 255), "\033[48;2;255;204;255m\033[38;2;0;0;0m"),
    ("Bright Cyan", (204, 255, 255), "\033[48;2;204;255;255m\033[38;2;0;0;0m"),
    ("Light Orange", (255, 229, 204), "\033[48;2;255;229;204m\033[38;2;0;0;0m"),
    ("Light Purple", (229, 204, 255), "\033[48;2;229;204;255m\033[38;2;0;0;0m"),
    ("Light Gray", (224, 224, 224), "\033[48;2;224;224;224m\033[38;2;0;0;0m"),
    ("Mint", (210, 240, 210), "\033[48;2;210;240;210m\033[38;2;0;0;0m"),
    ("Peach", (255, 218, 185), "\033[48;2;255;218;185m\033[38;2;0;0;0m"),
    ("Sky Blue", (173, 216, 230), "\033[48;2;173;216;230m\033[38;2;0;0;0m"),
]

# --- DIFFICULTY SCORING ---
# Tier 0 is bookkeeping and scores nothing.
TECHNIQUE_SCORES = {
    0: 0, 1: 1, 2: 5, 3: 25
}
BREAK_IN_BONUS = {
    3: 50
}
TECHNIQUE_TIERS = {
    'line_saturation': 1,
    'star_adjacency': 1,
    'region_reduction': 0,
    'forced_line_star': 2,
    'forced_region_star': 2,
    'small_region_middle': 3,
    'edge_contiguity': 3,
}

# --- SBN (STAR BATTLE NOTATION) ---
SBN_B64_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_'
SBN_CHAR_TO_INT = {c: i for i, c in enumerate(SBN_B64_ALPHABET)}
SBN_INT_TO_CHAR = {i: c for i, c in enumerate(SBN_B64_ALPHABET)}
SBN_CODE_TO_DIM_MAP = {
    '55': 5,  '66': 6,  '77': 7,  '88': 8,  '99': 9, 'AA': 10, 'BB': 11, 'CC': 12, 'DD': 13,
    'EE': 14, 'FF': 15, 'GG': 16, 'HH': 17, 'II': 18, 'JJ': 19, 'KK': 20, 'LL': 21, 'MM': 22,
    'NN': 23, 'OO': 24, 'PP': 25
}
DIM_TO_SBN_CODE_MAP = {v: k for k, v in SBN_CODE_TO_DIM_MAP.items()}
