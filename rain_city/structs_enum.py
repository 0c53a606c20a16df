from enum import Enum


class Axis(Enum):
    X = 0
    Z = 1


class Heading(Enum):
    POS_X = 0  # +X
    NEG_X = 1  # -X
    POS_Z = 2  # +Z
    NEG_Z = 3  # -Z

    @property
    def axis(self):
        return Axis.X if self in (Heading.POS_X, Heading.NEG_X) else Axis.Z

    @property
    def sign(self):
        return 1.0 if self in (Heading.POS_X, Heading.POS_Z) else -1.0

    @classmethod
    def from_axis(cls, axis, sign):
        if axis == Axis.X:
            return cls.POS_X if sign > 0 else cls.NEG_X
        return cls.POS_Z if sign > 0 else cls.NEG_Z
