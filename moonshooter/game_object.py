"""Sprites, game objects with hit points and collision, and object pools."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Generic, Iterator, TypeVar

from moonshooter.config import BLINK_TICKS, DAMAGE_FRAME


def _to_int(value: float) -> int:
    return math.floor(value)


@dataclass(frozen=True)
class SpriteDefinition:
    """Static sprite resource: frame count of each animation and frame delay."""

    name: str
    animations: tuple[int, ...]
    frame_delay: int = 4


PLAYER_SPRITE = SpriteDefinition("player_sprite", (2, 2, 2))
ENEMY_SPRITE = SpriteDefinition("enemy_sprite", (2,))
BULLET_SPRITE = SpriteDefinition("bullet_sprite", (2,))
EXPLOSION_SPRITE = SpriteDefinition("explosion_sprite", (6,))


@dataclass(eq=False)
class Sprite:
    """A hardware-style sprite with position, visibility and animation state."""

    definition: SpriteDefinition
    x: int = 0
    y: int = 0
    palette: int = 0
    visible: bool = True
    loop: bool = True
    always_on_top: bool = False
    anim: int = 0
    frame: int = 0
    _timer: int = field(default=0, repr=False)
    _done: bool = field(default=False, repr=False)

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def set_anim(self, anim: int) -> None:
        if not 0 <= anim < len(self.definition.animations):
            raise ValueError(f"{self.definition.name} has no animation {anim}")
        if anim != self.anim:
            self.anim = anim
            self.frame = 0
            self._timer = 0
            self._done = False

    def set_frame(self, frame: int) -> None:
        if not 0 <= frame < self.definition.animations[self.anim]:
            raise ValueError(
                f"{self.definition.name} animation {self.anim} has no frame {frame}"
            )
        self.frame = frame
        self._timer = 0
        self._done = False

    def set_anim_and_frame(self, anim: int, frame: int) -> None:
        self.set_anim(anim)
        self.set_frame(frame)

    def tick(self) -> None:
        """Advance the animation by one display frame."""
        if self._done:
            return
        self._timer += 1
        if self._timer < self.definition.frame_delay:
            return
        self._timer = 0
        if self.frame + 1 < self.definition.animations[self.anim]:
            self.frame += 1
        elif self.loop:
            self.frame = 0
        else:
            self._done = True

    def is_animation_done(self) -> bool:
        return self._done


class CollisionLayer(IntFlag):
    """Layers an object belongs to and can collide with."""

    NONE = 0
    PLAYER = 1
    ENEMY = 2
    PROJECTILE = 4
    EXPLOSION = 8
    ALL = PLAYER | ENEMY | PROJECTILE | EXPLOSION


@dataclass(eq=False)
class GameObject:
    """Positioned object with a sprite, hit points and damage."""

    sprite: Sprite | None = None
    x: float = 0.0
    y: float = 0.0
    w: int = 0
    h: int = 0
    hp: int = 0
    damage: int = 0
    blink_counter: int = 0
    collision_layer: CollisionLayer = CollisionLayer.ALL
    collision_mask: CollisionLayer = CollisionLayer.ALL

    def init(self, sprite_def, palette, x, y, w, h, hp, damage) -> None:
        """Place the object, (re)using its sprite, and reset its stats."""
        if self.sprite is None:
            self.sprite = Sprite(sprite_def, _to_int(x), _to_int(y), palette)
        else:
            self.sprite.set_position(_to_int(x), _to_int(y))
        self.sprite.visible = True
        self.sprite.set_anim_and_frame(0, 0)
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self.hp = hp
        self.damage = damage

    def apply_damage_by(self, other: GameObject) -> None:
        if self.hp > other.damage:
            self.hp -= other.damage
            if self.sprite is not None:
                self.sprite.set_frame(DAMAGE_FRAME)
            self.blink_counter = BLINK_TICKS
        else:
            self.hp = 0

    def collides_with(self, other: GameObject) -> bool:
        if not (self.collision_mask & other.collision_layer) or not (
            other.collision_mask & self.collision_layer
        ):
            return False
        if self.y > other.y + other.h or self.y + self.h < other.y:
            return False
        if self.x + self.w < other.x or self.x > other.x + other.w:
            return False
        return True

    def collision_update(self, other: GameObject) -> bool:
        """Apply mutual damage if the objects overlap; report whether they did."""
        if self.collides_with(other):
            self.apply_damage_by(other)
            other.apply_damage_by(self)
            return True
        return False


T = TypeVar("T", bound=GameObject)


class ObjectPool(Generic[T]):
    """Fixed-capacity pool of preallocated objects."""

    def __init__(self, factory: Callable[[], T], capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._free: list[T] = [factory() for _ in range(capacity)]
        self._allocated: list[T] = []

    def allocate(self) -> T | None:
        """Take a free object, or return None when the pool is exhausted."""
        if not self._free:
            return None
        obj = self._free.pop()
        self._allocated.append(obj)
        return obj

    def release(self, obj: T) -> None:
        try:
            self._allocated.remove(obj)
        except ValueError:
            raise ValueError("object is not allocated from this pool") from None
        self._free.append(obj)

    def __iter__(self) -> Iterator[T]:
        # Snapshot so objects may be released while iterating.
        return iter(tuple(self._allocated))

    def __len__(self) -> int:
        return len(self._allocated)


def release_object(obj: GameObject, pool: ObjectPool) -> None:
    """Hide the object's sprite and return it to its pool."""
    if obj.sprite is not None:
        obj.sprite.visible = False
    pool.release(obj)