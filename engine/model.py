from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .minefield import Minefield

@dataclass(frozen=True)
class Position:
    """Integer grid coordinate. Replaced wholesale, never mutated."""
    x: int
    y: int

    def forward(self) -> "Position":
        """One line further along the forward (y) axis."""
        return Position(self.x, self.y + 1)

    def to_dict(self) -> Dict:
        return {"x": int(self.x), "y": int(self.y)}

class UnitStatus(Enum):
    ALIVE = "alive"
    KILLED = "killed"

class Capability(Flag):
    """Orthogonal behaviour sets a unit type can carry."""
    NONE = 0
    MOVABLE = auto()    # moves by itself
    SHOOTER = auto()    # shoot / reload
    TOWABLE = auto()    # relocated only by a towing unit
    TOWING = auto()     # holds one hooked towable
    CONTAINER = auto()  # carries units (add/remove/list)
    COMPOSITE = auto()  # groups units as children (squad)

class UnitClass(Enum):
    """Unit classification, used by outcome policies"""
    SOLDIER = "soldier"
    TANK = "tank"
    BTR = "btr"
    GUN = "gun"
    SQUAD = "squad"

class CapabilityError(ValueError):
    """Raised when an operation is called on a unit lacking the capability."""

@dataclass
class UnitType:
    """Template defining characteristics of a unit type"""
    name: str
    unit_class: UnitClass
    capabilities: Capability
    speed: float = 0.0
    caliber: float = 0.0
    shoot_range: float = 0.0

# Predefined unit types
UNIT_TYPES = {
    "SOLDIER": UnitType(
        name="Soldier",
        unit_class=UnitClass.SOLDIER,
        capabilities=Capability.MOVABLE | Capability.SHOOTER,
        speed=6,
        caliber=7.62,
        shoot_range=2
    ),
    "TANK": UnitType(
        name="Main Battle Tank",
        unit_class=UnitClass.TANK,
        capabilities=Capability.MOVABLE | Capability.SHOOTER,
        speed=30,
        caliber=120,
        shoot_range=4
    ),
    "BTR": UnitType(
        name="Armoured Personnel Carrier",
        unit_class=UnitClass.BTR,
        capabilities=Capability.MOVABLE | Capability.SHOOTER | Capability.TOWING | Capability.CONTAINER,
        speed=40,
        caliber=30,
        shoot_range=3
    ),
    "GUN": UnitType(
        name="Towed Field Gun",
        unit_class=UnitClass.GUN,
        capabilities=Capability.TOWABLE | Capability.SHOOTER,
        speed=0,  # cannot move by itself
        caliber=122,
        shoot_range=20
    ),
    "SQUAD": UnitType(
        name="Infantry Squad",
        unit_class=UnitClass.SQUAD,
        capabilities=Capability.MOVABLE | Capability.SHOOTER | Capability.TOWING | Capability.COMPOSITE,
        speed=6,
        caliber=7.62,
        shoot_range=2
    ),
}

@dataclass
class Unit:
    id: str
    name: str
    unit_type_id: str  # Key into UNIT_TYPES
    pos: Position
    status: UnitStatus = UnitStatus.ALIVE
    speed_override: Optional[float] = None
    caliber_override: Optional[float] = None
    range_override: Optional[float] = None
    rank: Optional[str] = None
    model: Optional[str] = None
    hooked_id: Optional[str] = None  # Handle into the registry, never an owning link
    contents: List[str] = field(default_factory=list)  # Owned child ids, duplicates allowed

    def get_type(self) -> UnitType:
        """Get the UnitType definition for this unit"""
        return UNIT_TYPES[self.unit_type_id]

    def has(self, cap: Capability) -> bool:
        return cap in self.get_type().capabilities

    @property
    def alive(self) -> bool:
        return self.status == UnitStatus.ALIVE

    @property
    def is_movable(self) -> bool:
        return self.has(Capability.MOVABLE)

    @property
    def speed(self) -> float:
        if self.speed_override is not None:
            return self.speed_override
        return self.get_type().speed

    @property
    def caliber(self) -> float:
        if self.caliber_override is not None:
            return self.caliber_override
        return self.get_type().caliber

    @property
    def shoot_range(self) -> float:
        if self.range_override is not None:
            return self.range_override
        return self.get_type().shoot_range

    def to_dict(self) -> Dict:
        return {
            "id": self.id, "name": self.name, "type": self.unit_type_id,
            "status": self.status.value, "pos": self.pos.to_dict(),
            "speed": self.speed, "hooked_id": self.hooked_id,
            "contents": list(self.contents),
        }

@dataclass
class Event:
    kind: str
    line: int
    data: Dict

@dataclass
class State:
    field_size: int
    units: Dict[str, Unit] = field(default_factory=dict)
    field_ids: List[str] = field(default_factory=list)  # Ordered ids the engine advances
    minefield: Optional["Minefield"] = None
    current_line: int = 0
    battle_id: str = "local"
