"""
Constants of (standard) ten-pin bowling used across layers
"""

# Pins standing in a full rack
PINS_PER_RACK = 10

# Frames per player. The last one may hold a third (bonus) roll.
FRAMES_PER_GAME = 10
