class RankingsException(Exception):
    """Base class for errors raised by the character_rankings package."""
