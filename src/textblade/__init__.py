"""TextBlade: state and simulation engine for choice-driven RPG adventures."""

__version__ = "0.1.0"
