"""
constants.py: Centralized default settings for the board, entities and timers.
"""

# -------- Board Config --------
BOARD_WIDTH = 360
BOARD_HEIGHT = 640

# -------- Bird Config --------
BIRD_WIDTH = 34
BIRD_HEIGHT = 24

# -------- Pipe Config --------
PIPE_WIDTH = 64
PIPE_HEIGHT = 512
PIPE_VELOCITY_X = -4            # Horizontal speed (pixels/frame)
PASS_INCREMENT = 0.5            # Per pipe, so one point per top/bottom pair

# -------- Physics Config (Pixels / Frame / Frame) --------
GRAVITY = 1
FLAP_VELOCITY = -9              # Velocity after a flap, not added to the old one

# -------- Timers --------
TICK_RATE = 60                          # Physics ticks per second
TICK_INTERVAL_MS = 1000 // TICK_RATE    # Integer period, as a millisecond timer sees it
SPAWN_INTERVAL_MS = 1500

# -------- Presentation --------
RENDER_FPS = 60
WINDOW_TITLE = "Flappy Bird"
