"""
Game constants for SnakeSim.
"""

from .position import Position

# Movement directions (screen coordinates: y grows downwards)
RIGHT = Position(1, 0)
DOWN = Position(0, 1)
LEFT = Position(-1, 0)
UP = Position(0, -1)

# Candidate directions are always evaluated in this order
DIRECTIONS = (RIGHT, DOWN, LEFT, UP)

DIRECTION_NAMES = {
    RIGHT: "RIGHT",
    DOWN: "DOWN",
    LEFT: "LEFT",
    UP: "UP",
}

# Fruit
FRUIT_TARGET = 3
FRUIT_REWARD = 10

# Snakes
MIN_SNAKE_LENGTH = 3
RESPAWN_PENALTY = 10

# Power-ups
SPEED = "speed"
SHIELD = "shield"
MULTIPLIER = "multiplier"
POWERUP_TYPES = (SPEED, SHIELD, MULTIPLIER)
MAX_POWERUPS = 5
POWERUP_SPAWN_CHANCE = 0.02
POWERUP_DURATION = 50  # ticks; five seconds at the default game speed
SPEED_BOOST = 2.0
SCORE_MULTIPLIER = 2

# Spawn
SPAWN_ATTEMPTS = 100

# Initial placement
PLACEMENT_ATTEMPTS = 100
PLACEMENT_EDGE_MARGIN = 8
PLACEMENT_SEPARATION = 4
