# Client -> server
JOIN_ROOM = "join_room"
ASK_QUESTION = "ask_question"
MAKE_GUESS = "make_guess"
FORFEIT = "forfeit"
NEW_GAME = "new_game"

# Server -> client
ROOM_JOINED = "room_joined"
PLAYER_JOINED = "player_joined"
PLAYER_LEFT = "player_left"
WAITING_FOR_PLAYER = "waiting_for_player"
GAME_STARTED = "game_started"
QUESTION_ANSWERED = "question_answered"
GUESS_RESULT = "guess_result"
GAME_OVER = "game_over"
SCORES_UPDATED = "scores_updated"
PLAYER_FORFEITED = "player_forfeited"
ERROR_MESSAGE = "error_message"
