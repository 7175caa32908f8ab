"""
Games module - Game-specific data.

Each game has its own subpackage with its card list and the code that
seats players and builds the opening GameState.
"""
