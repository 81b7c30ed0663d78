"""Directory of tracked campus locations.

Ids are stable configuration; display names and aliases are what the hours
pages print and feed the NameMatcher. Coordinates are entrance pins used for
distance sorting.
"""

import math
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict

from campus_hours.normalize import NameMatcher

METERS_PER_MILE = 1609.344
EARTH_RADIUS_METERS = 6_371_008.8


class EntityKind(str, Enum):
    RESIDENTIAL = "residential"
    CAMPUS_RETAIL = "campusRetail"
    LIBRARY = "library"


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class Entity(BaseModel):
    """One dining hall, retail eatery or library."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: EntityKind
    coordinate: GeoPoint | None = None
    aliases: tuple[str, ...] = ()  # names used by other sources (occupancy feed, hours pages)

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


def distance_miles(origin: GeoPoint, target: GeoPoint) -> float:
    """Great-circle (haversine) distance between two points, in miles."""
    lat1, lat2 = math.radians(origin.lat), math.radians(target.lat)
    dlat = lat2 - lat1
    dlon = math.radians(target.lon - origin.lon)
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    meters = 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))
    return meters / METERS_PER_MILE


def _entity(id: str, name: str, kind: EntityKind, lat: float, lon: float, *aliases: str) -> Entity:
    return Entity(id=id, name=name, kind=kind, coordinate=GeoPoint(lat=lat, lon=lon), aliases=aliases)


_R = EntityKind.RESIDENTIAL
_C = EntityKind.CAMPUS_RETAIL
_L = EntityKind.LIBRARY

DEFAULT_ENTITIES: tuple[Entity, ...] = (
    # Residential halls
    _entity("BruinPlate", "Bruin Plate", _R, 34.07171, -118.44988, "Bruin Plate Residential Restaurant"),
    _entity("EpicuriaAtCovel", "Epicuria at Covel", _R, 34.07283, -118.45010, "Covel Residential Restaurant", "Covel"),
    _entity("DeNeveDining", "De Neve Dining", _R, 34.07054, -118.45026, "De Neve Residential Restaurant", "De Neve"),
    _entity("EpicuriaAtAckerman", "Epicuria at Ackerman", _R, 34.07037, -118.44431, "Epicuria"),
    _entity("TheDrey", "The Drey", _R, 34.07237, -118.45331),
    _entity("TheStudyAtHedrick", "The Study at Hedrick", _R, 34.07332, -118.45211),
    _entity("Rendezvous", "Rendezvous", _R, 34.07253, -118.45192),
    _entity("BruinCafe", "Bruin Café", _R, 34.07267, -118.45044),
    _entity("Cafe1919", "Café 1919", _R, 34.07257, -118.45087),
    _entity("FEASTAtRieber", "FEAST at Rieber", _R, 34.07180, -118.45135),
    # Campus retail
    _entity("LollicupFresh", "Lollicup Fresh", _C, 34.07022, -118.44494),
    _entity("WetzelsPretzels", "Wetzel’s Pretzels", _C, 34.07019, -118.44503),
    _entity("Sweetspot", "Sweetspot", _C, 34.07016, -118.44506),
    _entity("PandaExpress", "Panda Express", _C, 34.07023, -118.44504),
    _entity("Rubios", "Rubio’s", _C, 34.07025, -118.44497),
    _entity("VeggieGrill", "Veggie Grill", _C, 34.07026, -118.44490),
    _entity("EpicuriaAck", "Epicuria at Ackerman", _C, 34.07036, -118.44499),
    _entity("CORE", "CORE (Ready-to-Eat)", _C, 34.07028, -118.44486, "CORE"),
    _entity("JambaBlendid", "Jamba by Blendid", _C, 34.07015, -118.44486),
    _entity("KerckhoffCoffee", "Kerckhoff Coffee House", _C, 34.07079, -118.44409),
    _entity("NorthernLights", "Northern Lights", _C, 34.07088, -118.44554),
    _entity("Cafe451", "Cafe 451", _C, 34.06869, -118.44193),
    _entity("LuValleCommons", "Lu Valle Commons", _C, 34.07531, -118.43862),
    _entity("CourtOfSciences", "Court of Sciences Student Center", _C, 34.06854, -118.44257),
    _entity("MusicCafe", "Music Café", _C, 34.07064, -118.43952),
    _entity("SouthCampusFood", "South Campus Food Court", _C, 34.06655, -118.44190),
    # Libraries
    _entity("powell", "Powell Library", _L, 34.07192, -118.44218, "Powell"),
    _entity("youngresearch", "Charles E. Young Research Library", _L, 34.07460, -118.44135, "Young Research Library"),
    _entity("biomed", "Biomedical Library", _L, 34.06676, -118.44236),
    _entity("music", "Music Library", _L, 34.07103, -118.44045),
    _entity("arts", "Arts Library", _L, 34.07430, -118.43934),
    _entity("management", "Management Library", _L, 34.07429, -118.44362, "Rosenfeld Management Library"),
    _entity("sel", "Science and Engineering Library", _L, 34.06923, -118.44256),
    _entity("eastasian", "East Asian Library", _L, 34.07473, -118.44191),
    _entity("lawlib", "Law Library", _L, 34.07290, -118.43827, "Hugh & Hazel Darling Law Library"),
)


class EntityDirectory:
    """Read-only lookup over the configured entities."""

    def __init__(self, entities: tuple[Entity, ...] = DEFAULT_ENTITIES) -> None:
        self._entities = {e.id: e for e in entities}

    def __contains__(self, entity_id: str) -> bool:
        return entity_id in self._entities

    def __iter__(self):
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

    def get(self, entity_id: str) -> Entity | None:
        return self._entities.get(entity_id)

    def ids(self) -> tuple[str, ...]:
        return tuple(self._entities)

    def of_kind(self, kind: EntityKind) -> list[Entity]:
        return [e for e in self._entities.values() if e.kind == kind]

    def matcher(self, fallback_ids: Iterable[str] = ()) -> NameMatcher:
        """NameMatcher over these names, falling back to directory ids plus fallback_ids."""
        return NameMatcher(
            {e.id: e.names for e in self._entities.values()},
            fallback_ids=(*self._entities, *fallback_ids),
        )

    def sorted_by_distance(self, origin: GeoPoint | None, kind: EntityKind | None = None) -> list[Entity]:
        """Nearest first, then by name; alphabetical when origin is unknown."""
        entities = list(self) if kind is None else self.of_kind(kind)

        def key(entity: Entity) -> tuple[float, str]:
            if origin is None or entity.coordinate is None:
                return (math.inf, entity.name.casefold())
            return (distance_miles(origin, entity.coordinate), entity.name.casefold())

        return sorted(entities, key=key)
