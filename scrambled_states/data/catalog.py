"""Static catalog of the fifty US states used as game cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple


class Region(str, Enum):
    """Census-style region a state belongs to."""

    SOUTH = "South"
    WEST = "West"
    NORTHEAST = "Northeast"
    MIDWEST = "Midwest"


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Approximate geographic centre of a state in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class State:
    """A single state card.

    Two records describe the same state whenever their names match, so
    equality and hashing only look at ``name``.
    """

    name: str
    nickname: str = field(compare=False)
    capital: str = field(compare=False)
    syllables: int = field(compare=False)
    coastal: bool = field(compare=False)
    region: Region = field(compare=False)
    neighbors: Tuple[str, ...] = field(default=(), compare=False)
    coordinates: Coordinates = field(default=Coordinates(0.0, 0.0), compare=False)

    def borders(self, other: str) -> bool:
        return other in self.neighbors


def _state(
    name: str,
    nickname: str,
    capital: str,
    syllables: int,
    coastal: bool,
    region: Region,
    neighbors: Tuple[str, ...],
    coordinates: Tuple[float, float],
) -> State:
    latitude, longitude = coordinates
    return State(
        name=name,
        nickname=nickname,
        capital=capital,
        syllables=syllables,
        coastal=coastal,
        region=region,
        neighbors=tuple(neighbors),
        coordinates=Coordinates(latitude, longitude),
    )


_STATES: Tuple[State, ...] = (
    _state(
        "Alabama", "Yellowhammer State", "Montgomery", 4, True, Region.SOUTH,
        ("Tennessee", "Georgia", "Florida", "Mississippi"),
        (32.806671, -86.791130),
    ),
    _state(
        "Alaska", "Last Frontier", "Juneau", 3, True, Region.WEST,
        (),
        (61.370716, -152.404419),
    ),
    _state(
        "Arizona", "Grand Canyon State", "Phoenix", 4, False, Region.WEST,
        ("California", "Nevada", "Utah", "Colorado", "New Mexico"),
        (33.729759, -111.431221),
    ),
    _state(
        "Arkansas", "Natural State", "Little Rock", 3, False, Region.SOUTH,
        ("Missouri", "Tennessee", "Mississippi", "Louisiana", "Texas", "Oklahoma"),
        (34.969704, -92.373123),
    ),
    _state(
        "California", "Golden State", "Sacramento", 4, True, Region.WEST,
        ("Oregon", "Nevada", "Arizona"),
        (36.116203, -119.681564),
    ),
    _state(
        "Colorado", "Centennial State", "Denver", 4, False, Region.WEST,
        ("Wyoming", "Nebraska", "Kansas", "Oklahoma", "New Mexico", "Arizona", "Utah"),
        (39.059811, -105.311104),
    ),
    _state(
        "Connecticut", "Constitution State", "Hartford", 4, True, Region.NORTHEAST,
        ("Massachusetts", "Rhode Island", "New York"),
        (41.597782, -72.755371),
    ),
    _state(
        "Delaware", "First State", "Dover", 3, True, Region.NORTHEAST,
        ("Pennsylvania", "New Jersey", "Maryland"),
        (39.318523, -75.507141),
    ),
    _state(
        "Florida", "Sunshine State", "Tallahassee", 3, True, Region.SOUTH,
        ("Alabama", "Georgia"),
        (27.766279, -81.686783),
    ),
    _state(
        "Georgia", "Peach State", "Atlanta", 2, True, Region.SOUTH,
        ("Tennessee", "North Carolina", "South Carolina", "Florida", "Alabama"),
        (33.040619, -83.643074),
    ),
    _state(
        "Hawaii", "Aloha State", "Honolulu", 3, True, Region.WEST,
        (),
        (21.094318, -157.498337),
    ),
    _state(
        "Idaho", "Gem State", "Boise", 3, False, Region.WEST,
        ("Montana", "Wyoming", "Utah", "Nevada", "Oregon", "Washington"),
        (44.240459, -114.478828),
    ),
    _state(
        "Illinois", "Prairie State", "Springfield", 3, False, Region.MIDWEST,
        ("Wisconsin", "Indiana", "Kentucky", "Missouri", "Iowa"),
        (40.349457, -88.986137),
    ),
    _state(
        "Indiana", "Hoosier State", "Indianapolis", 4, False, Region.MIDWEST,
        ("Michigan", "Ohio", "Kentucky", "Illinois"),
        (39.849426, -86.258278),
    ),
    _state(
        "Iowa", "Hawkeye State", "Des Moines", 3, False, Region.MIDWEST,
        ("Minnesota", "Wisconsin", "Illinois", "Missouri", "Nebraska", "South Dakota"),
        (42.011539, -93.210526),
    ),
    _state(
        "Kansas", "Sunflower State", "Topeka", 2, False, Region.MIDWEST,
        ("Nebraska", "Missouri", "Oklahoma", "Colorado"),
        (38.526600, -96.726486),
    ),
    _state(
        "Kentucky", "Bluegrass State", "Frankfort", 3, False, Region.SOUTH,
        ("Illinois", "Indiana", "Ohio", "West Virginia", "Virginia", "Tennessee", "Missouri"),
        (37.668140, -84.670067),
    ),
    _state(
        "Louisiana", "Pelican State", "Baton Rouge", 4, True, Region.SOUTH,
        ("Arkansas", "Mississippi", "Texas"),
        (31.169546, -91.867805),
    ),
    _state(
        "Maine", "Pine Tree State", "Augusta", 1, True, Region.NORTHEAST,
        ("New Hampshire",),
        (44.693947, -69.381927),
    ),
    _state(
        "Maryland", "Old Line State", "Annapolis", 3, True, Region.SOUTH,
        ("Pennsylvania", "Delaware", "Virginia", "West Virginia"),
        (39.063946, -76.802101),
    ),
    _state(
        "Massachusetts", "Bay State", "Boston", 4, True, Region.NORTHEAST,
        ("Vermont", "New Hampshire", "Rhode Island", "Connecticut", "New York"),
        (42.230171, -71.530106),
    ),
    _state(
        "Michigan", "Great Lakes State", "Lansing", 3, False, Region.MIDWEST,
        ("Wisconsin", "Indiana", "Ohio"),
        (43.326618, -84.536095),
    ),
    _state(
        "Minnesota", "North Star State", "Saint Paul", 4, False, Region.MIDWEST,
        ("North Dakota", "South Dakota", "Iowa", "Wisconsin"),
        (45.694454, -93.900192),
    ),
    _state(
        "Mississippi", "Magnolia State", "Jackson", 4, True, Region.SOUTH,
        ("Tennessee", "Alabama", "Louisiana", "Arkansas"),
        (32.741646, -89.678696),
    ),
    _state(
        "Missouri", "Show Me State", "Jefferson City", 3, False, Region.MIDWEST,
        ("Iowa", "Illinois", "Kentucky", "Tennessee", "Arkansas", "Oklahoma", "Kansas", "Nebraska"),
        (38.456085, -92.288368),
    ),
    _state(
        "Montana", "Treasure State", "Helena", 3, False, Region.WEST,
        ("North Dakota", "South Dakota", "Wyoming", "Idaho"),
        (46.921925, -110.454353),
    ),
    _state(
        "Nebraska", "Cornhusker State", "Lincoln", 3, False, Region.MIDWEST,
        ("South Dakota", "Iowa", "Missouri", "Kansas", "Colorado", "Wyoming"),
        (41.125370, -98.268082),
    ),
    _state(
        "Nevada", "Silver State", "Carson City", 3, False, Region.WEST,
        ("Oregon", "Idaho", "Utah", "Arizona", "California"),
        (38.313515, -117.055374),
    ),
    _state(
        "New Hampshire", "Granite State", "Concord", 3, True, Region.NORTHEAST,
        ("Vermont", "Maine", "Massachusetts"),
        (43.452492, -71.563896),
    ),
    _state(
        "New Jersey", "Garden State", "Trenton", 3, True, Region.NORTHEAST,
        ("New York", "Delaware", "Pennsylvania"),
        (40.298904, -74.521011),
    ),
    _state(
        "New Mexico", "Land of Enchantment", "Santa Fe", 4, False, Region.WEST,
        ("Colorado", "Oklahoma", "Texas", "Arizona"),
        (34.840515, -106.248482),
    ),
    _state(
        "New York", "Empire State", "Albany", 2, True, Region.NORTHEAST,
        ("Vermont", "Massachusetts", "Connecticut", "Pennsylvania", "New Jersey"),
        (42.165726, -74.948051),
    ),
    _state(
        "North Carolina", "Tar Heel State", "Raleigh", 5, True, Region.SOUTH,
        ("Virginia", "Tennessee", "Georgia", "South Carolina"),
        (35.630066, -79.806419),
    ),
    _state(
        "North Dakota", "Peace Garden State", "Bismarck", 4, False, Region.MIDWEST,
        ("Montana", "South Dakota", "Minnesota"),
        (47.528912, -99.784012),
    ),
    _state(
        "Ohio", "Buckeye State", "Columbus", 2, False, Region.MIDWEST,
        ("Michigan", "Pennsylvania", "West Virginia", "Kentucky", "Indiana"),
        (40.388783, -82.764915),
    ),
    _state(
        "Oklahoma", "Sooner State", "Oklahoma City", 4, False, Region.SOUTH,
        ("Kansas", "Missouri", "Arkansas", "Texas", "New Mexico", "Colorado"),
        (35.565342, -96.928917),
    ),
    _state(
        "Oregon", "Beaver State", "Salem", 3, True, Region.WEST,
        ("Washington", "Idaho", "Nevada", "California"),
        (44.572021, -122.070938),
    ),
    _state(
        "Pennsylvania", "Keystone State", "Harrisburg", 5, False, Region.NORTHEAST,
        ("New York", "New Jersey", "Delaware", "Maryland", "West Virginia", "Ohio"),
        (40.590752, -77.209755),
    ),
    _state(
        "Rhode Island", "Ocean State", "Providence", 3, True, Region.NORTHEAST,
        ("Massachusetts", "Connecticut"),
        (41.680893, -71.511780),
    ),
    _state(
        "South Carolina", "Palmetto State", "Columbia", 5, True, Region.SOUTH,
        ("North Carolina", "Georgia"),
        (33.856892, -80.945007),
    ),
    _state(
        "South Dakota", "Mount Rushmore State", "Pierre", 4, False, Region.MIDWEST,
        ("North Dakota", "Minnesota", "Iowa", "Nebraska", "Wyoming", "Montana"),
        (44.299782, -99.438828),
    ),
    _state(
        "Tennessee", "Volunteer State", "Nashville", 3, False, Region.SOUTH,
        ("Kentucky", "Virginia", "North Carolina", "Georgia", "Alabama", "Mississippi", "Arkansas", "Missouri"),
        (35.747845, -86.692345),
    ),
    _state(
        "Texas", "Lone Star State", "Austin", 2, True, Region.SOUTH,
        ("Oklahoma", "Arkansas", "Louisiana", "New Mexico"),
        (31.054487, -97.563461),
    ),
    _state(
        "Utah", "Beehive State", "Salt Lake City", 2, False, Region.WEST,
        ("Idaho", "Wyoming", "Colorado", "Arizona", "Nevada"),
        (40.150032, -111.862434),
    ),
    _state(
        "Vermont", "Green Mountain State", "Montpelier", 2, False, Region.NORTHEAST,
        ("New Hampshire", "Massachusetts", "New York"),
        (44.045876, -72.710686),
    ),
    _state(
        "Virginia", "Old Dominion", "Richmond", 3, True, Region.SOUTH,
        ("Maryland", "West Virginia", "Kentucky", "Tennessee", "North Carolina"),
        (37.769337, -78.169968),
    ),
    _state(
        "Washington", "Evergreen State", "Olympia", 3, True, Region.WEST,
        ("Idaho", "Oregon"),
        (47.400902, -121.490494),
    ),
    _state(
        "West Virginia", "Mountain State", "Charleston", 4, False, Region.SOUTH,
        ("Ohio", "Pennsylvania", "Maryland", "Virginia", "Kentucky"),
        (38.491226, -80.954453),
    ),
    _state(
        "Wisconsin", "Badger State", "Madison", 3, False, Region.MIDWEST,
        ("Minnesota", "Iowa", "Illinois", "Michigan"),
        (44.268543, -89.616508),
    ),
    _state(
        "Wyoming", "Equality State", "Cheyenne", 3, False, Region.WEST,
        ("Montana", "South Dakota", "Nebraska", "Colorado", "Utah", "Idaho"),
        (42.755966, -107.302490),
    ),
)

_BY_NAME: Dict[str, State] = {state.name.lower(): state for state in _STATES}


def all_states() -> Sequence[State]:
    """Return every state in catalog order; the order never changes."""

    return _STATES


def get_state(name: str) -> Optional[State]:
    """Look a state up by name, ignoring case and surrounding whitespace."""

    return _BY_NAME.get(name.strip().lower())


__all__ = ["Coordinates", "Region", "State", "all_states", "get_state"]
