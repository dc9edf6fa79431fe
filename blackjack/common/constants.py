# blackjack/common/constants.py

import os

# Server address (client connects here, server listens here)
SERVER_HOST = os.getenv("BLACKJACK_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("BLACKJACK_PORT", "3000"))

# Shoe: 8 standard decks
ONE_SET_CARDS_AMOUNT = 52
DECKS_IN_SHOE = 8
SHOE_SIZE = ONE_SET_CARDS_AMOUNT * DECKS_IN_SHOE  # 416

# Rank slicing inside one 52-card set (rank = identifier % 52)
CARDS_WITH_SAME_VALUE_BY_COLOR = 4
MINIMUM_CARD_VALUE = 2
TEN_POINTS_CARDS_START_INDEX = 32
ACE_CARDS_START_INDEX = 48

TEN_VALUE_CARDS_POINTS = 10
ACE_HARD_POINTS = 1
ACE_SOFT_POINTS = 11
MAX_POINTS_FOR_SOFT_ACE = 11

# Hand thresholds
MAX_HAND_POINTS = 21
BANK_STAND_POINTS = 17

# Wire limits
MAX_HANDPOINTS_VALUE = 255
MAX_FRAME_LEN = 64 * 1024

# Client
DISPLAYED_BANK_CARDS_AFTER_DRAWING = 2
REVEAL_INTERVAL_S = 2.5
FRAME_INTERVAL_S = 0.1
