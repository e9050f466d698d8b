"""Reference geography for the game cards."""

from .catalog import Coordinates, Region, State, all_states, get_state
from .lookups import latitude_of, longitude_of, westward_longitude_of

__all__ = [
    "Coordinates",
    "Region",
    "State",
    "all_states",
    "get_state",
    "latitude_of",
    "longitude_of",
    "westward_longitude_of",
]
