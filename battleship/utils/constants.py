"""Game rule constants."""

# Board dimensions
BOARD_SIZE = 10

# Fleet: (ship type name, size), in placement order
FLEET = (
    ("carrier", 5),
    ("battleship", 4),
    ("cruiser", 3),
    ("submarine", 3),
    ("destroyer", 2),
)

# Rooms
MAX_PARTICIPANTS = 2
ROOM_CODE_LENGTH = 6
ROOM_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"  # base-36
MAX_NAME_LENGTH = 32

# Random fleet placement gives up after this many attempts per ship
RANDOM_PLACEMENT_ATTEMPTS = 1000
