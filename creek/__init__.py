"""
Creek - Board Game Rule Engine

A deterministic, rules-driven engine for the dice race game "Up Shitz Creek".
The engine provides:
- Space table resolution
- Card effect classification and execution
- Draw-without-replacement deck with lazy reshuffle
- A turn state machine shared by human and bot players
"""

__version__ = "0.1.0"
