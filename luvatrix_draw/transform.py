from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass(frozen=True)
class AffineTransform:
    """2-D affine map ``x' = a*x + c*y + tx``, ``y' = b*x + d*y + ty``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> AffineTransform:
        return cls(tx=tx, ty=ty)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> AffineTransform:
        return cls(a=sx, d=sy)

    @classmethod
    def rotation(cls, angle: float) -> AffineTransform:
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return cls(a=cos_a, b=sin_a, c=-sin_a, d=cos_a)

    @property
    def is_identity(self) -> bool:
        return self == IDENTITY

    def determinant(self) -> float:
        return (self.a * self.d) - (self.b * self.c)

    def concatenating(self, other: AffineTransform) -> AffineTransform:
        """Return the transform that applies ``self`` first, then ``other``."""

        return AffineTransform(
            a=self.a * other.a + self.b * other.c,
            b=self.a * other.b + self.b * other.d,
            c=self.c * other.a + self.d * other.c,
            d=self.c * other.b + self.d * other.d,
            tx=self.tx * other.a + self.ty * other.c + other.tx,
            ty=self.tx * other.b + self.ty * other.d + other.ty,
        )

    def inverted(self) -> AffineTransform | None:
        det = self.determinant()
        if abs(det) < 1e-12:
            return None
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return AffineTransform(
            a=a,
            b=b,
            c=c,
            d=d,
            tx=-(self.tx * a + self.ty * c),
            ty=-(self.tx * b + self.ty * d),
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.tx, self.b * x + self.d * y + self.ty)

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)


IDENTITY = AffineTransform()
