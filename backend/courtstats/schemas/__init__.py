from .players import PlayerCreate, PlayerUpdate

__all__ = ["PlayerCreate", "PlayerUpdate"]
