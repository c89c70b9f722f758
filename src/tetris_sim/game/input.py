from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InputState:
    """Button levels for one tick plus their change since the previous tick.

    The ``d*`` fields are ``current - previous`` and lie in {-1, 0, 1};
    a positive value means the button was pressed this tick.
    """

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    space: bool = False

    dleft: int = 0
    dright: int = 0
    dup: int = 0
    ddown: int = 0
    dspace: int = 0

    @classmethod
    def advance(
        cls,
        prev: "InputState",
        *,
        left: bool = False,
        right: bool = False,
        up: bool = False,
        down: bool = False,
        space: bool = False,
    ) -> "InputState":
        return cls(
            left=left,
            right=right,
            up=up,
            down=down,
            space=space,
            dleft=int(left) - int(prev.left),
            dright=int(right) - int(prev.right),
            dup=int(up) - int(prev.up),
            ddown=int(down) - int(prev.down),
            dspace=int(space) - int(prev.space),
        )

    @classmethod
    def pressed(cls, **buttons: bool) -> "InputState":
        """Edge-triggered input for buttons that were all up on the previous tick."""
        return cls.advance(cls(), **buttons)
