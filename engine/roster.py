from typing import Dict, Iterator, List, Optional
from .model import Capability, CapabilityError, Event, Position, Unit, UnitStatus

class Roster:
    """Registry of every unit in a battle and the actions they can take.

    Units are addressed by id. A towing unit's hook and a container's contents
    are both ids resolved here, so no unit holds a live reference to another.
    Rejected actions (dead unit, occupied hook, ...) never raise: they return
    False or the unchanged position and record a ``Blocked`` event.
    """

    def __init__(self, units: Optional[Dict[str, Unit]] = None):
        self.units: Dict[str, Unit] = units if units is not None else {}
        self.line = 0  # Stamped onto events; the engine keeps it in sync
        self._events: List[Event] = []

    # -- registry --

    def register(self, unit: Unit) -> Unit:
        self.units[unit.id] = unit
        return unit

    def get(self, unit_id: str) -> Unit:
        return self.units[unit_id]

    def __contains__(self, unit_id: str) -> bool:
        return unit_id in self.units

    def __iter__(self) -> Iterator[Unit]:
        return iter(self.units.values())

    def __len__(self) -> int:
        return len(self.units)

    def pop_events(self) -> List[Event]:
        """Return and clear the events recorded since the last call."""
        evts, self._events = self._events, []
        return evts

    def _emit(self, kind: str, **data) -> None:
        self._events.append(Event(kind, self.line, data))

    def _blocked(self, u: Unit, action: str, reason: str) -> None:
        print(f"[Roster] WARNING: {u.name} cannot {action}: {reason}")
        self._emit("Blocked", unit_id=u.id, action=action, reason=reason)

    def _require(self, u: Unit, cap: Capability, action: str) -> None:
        if not u.has(cap):
            raise CapabilityError(f"{u.id} ({u.unit_type_id}) cannot {action}")

    # -- lifecycle --

    def kill(self, unit_id: str) -> bool:
        """Kill a unit. Containers and squads take their contents with them."""
        u = self.get(unit_id)
        if u.status == UnitStatus.KILLED:
            return False
        u.status = UnitStatus.KILLED
        print(f"[Roster] This unit is killed: {u.name}")
        self._emit("Killed", unit_id=u.id, pos=u.pos.to_dict())
        if u.has(Capability.CONTAINER) or u.has(Capability.COMPOSITE):
            for child_id in list(u.contents):
                self.kill(child_id)
        return True

    # -- movement --

    def move_to(self, unit_id: str, to: Position) -> Position:
        u = self.get(unit_id)
        if not u.is_movable:
            if u.has(Capability.TOWABLE):
                self._blocked(u, "move", "cannot move by itself")
                return u.pos
            raise CapabilityError(f"{u.id} ({u.unit_type_id}) cannot move")
        return self._relocate(u, to)

    def move_forward(self, unit_id: str) -> Position:
        """Advance one line along the forward axis."""
        u = self.get(unit_id)
        if not u.is_movable:
            if u.has(Capability.TOWABLE):
                self._blocked(u, "move", "cannot move by itself")
                return u.pos
            raise CapabilityError(f"{u.id} ({u.unit_type_id}) cannot move")
        return self._relocate(u, u.pos.forward())

    def _relocate(self, u: Unit, to: Position) -> Position:
        if not u.alive:
            self._blocked(u, "move", "killed")
            return u.pos
        old = u.pos
        u.pos = to
        self._emit("Moved", unit_id=u.id, from_pos=old.to_dict(), to=to.to_dict())
        # Hooked unit follows the tower onto its new square
        if u.hooked_id is not None:
            self.tow_to(u.hooked_id, u.pos)
        return u.pos

    def tow_to(self, unit_id: str, to: Position) -> Position:
        """Relocate a towable unit. Only towing units should call this."""
        u = self.get(unit_id)
        self._require(u, Capability.TOWABLE, "be towed")
        if not u.alive:
            self._blocked(u, "be towed", "killed")
            return u.pos
        u.pos = to
        self._emit("Towed", unit_id=u.id, to=to.to_dict())
        return u.pos

    # -- towing --

    def hook(self, tower_id: str, towable_id: str) -> bool:
        tower = self.get(tower_id)
        self._require(tower, Capability.TOWING, "tow")
        self._require(self.get(towable_id), Capability.TOWABLE, "be towed")
        if not tower.alive:
            self._blocked(tower, "hook", "killed")
            return False
        if tower.hooked_id is not None:
            self._blocked(tower, "hook", f"already towing {tower.hooked_id}")
            return False
        tower.hooked_id = towable_id
        self._emit("Hooked", unit_id=tower.id, towable_id=towable_id)
        return True

    def unhook(self, tower_id: str, towable_id: str) -> bool:
        tower = self.get(tower_id)
        self._require(tower, Capability.TOWING, "tow")
        if not tower.alive:
            self._blocked(tower, "unhook", "killed")
            return False
        if tower.hooked_id is None or tower.hooked_id != towable_id:
            self._blocked(tower, "unhook", f"not towing {towable_id}")
            return False
        tower.hooked_id = None
        self._emit("Unhooked", unit_id=tower.id, towable_id=towable_id)
        return True

    def hooked(self, tower_id: str) -> Optional[Unit]:
        tower = self.get(tower_id)
        self._require(tower, Capability.TOWING, "tow")
        if tower.hooked_id is None:
            return None
        return self.units.get(tower.hooked_id)

    # -- weapons --

    def shoot(self, unit_id: str, amount: int = 1) -> bool:
        u = self.get(unit_id)
        self._require(u, Capability.SHOOTER, "shoot")
        if not u.alive:
            self._blocked(u, "shoot", "killed")
            return False
        print(f"[Roster] {u.name} Boom!")
        self._emit("Shot", unit_id=u.id, amount=amount, caliber=u.caliber)
        return True

    def reload(self, unit_id: str) -> bool:
        u = self.get(unit_id)
        self._require(u, Capability.SHOOTER, "reload")
        if not u.alive:
            self._blocked(u, "reload", "killed")
            return False
        print(f"[Roster] {u.name} is reloading...")
        self._emit("Reloaded", unit_id=u.id)
        return True

    # -- containment --

    def _holder(self, unit_id: str, action: str) -> Unit:
        u = self.get(unit_id)
        if not (u.has(Capability.CONTAINER) or u.has(Capability.COMPOSITE)):
            raise CapabilityError(f"{u.id} ({u.unit_type_id}) cannot {action}")
        return u

    def add(self, holder_id: str, child_id: str) -> bool:
        holder = self._holder(holder_id, "hold units")
        self.get(child_id)
        if not holder.alive:
            self._blocked(holder, "add", "killed")
            return False
        holder.contents.append(child_id)
        return True

    def remove(self, holder_id: str, child_id: str) -> bool:
        holder = self._holder(holder_id, "hold units")
        if not holder.alive:
            self._blocked(holder, "remove", "killed")
            return False
        if child_id not in holder.contents:
            return False
        holder.contents.remove(child_id)
        return True

    def contents(self, holder_id: str) -> List[Unit]:
        holder = self._holder(holder_id, "hold units")
        return [self.units[c] for c in holder.contents]

    children = contents
