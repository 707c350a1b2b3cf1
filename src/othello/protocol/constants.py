class Command:
    INIT = "INIT"
    NEWGAME = "NEWGAME"       # NEWGAME [size]
    PLAY = "PLAY"             # PLAY <coord> (e.g., PLAY d3)
    GENMOVE = "GENMOVE"       # auto move for the active color
    BOARD = "BOARD"           # Request board state
    VALID_MOVES = "VALID_MOVES"  # VALID_MOVES [color]
    SCORE = "SCORE"


class Response:
    READY = "READY"
    OK = "OK"
    MOVE = "MOVE"             # MOVE <coord>
    PASS = "PASS"             # PASS <color>, the named color's turn was skipped
    BOARD = "BOARD"           # BOARD <size> <active> <state_string>
    VALID_MOVES = "VALID_MOVES"  # VALID_MOVES <coord1> <coord2> ...
    SCORE = "SCORE"           # SCORE <black> <white>
    ERROR = "ERROR"           # ERROR <msg>
    RESULT = "RESULT"         # RESULT <BLACK|WHITE|TIE> [percent]
