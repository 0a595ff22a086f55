# geometry.py
"""
二维几何基础：点/向量、线段、环（顶点序列）以及凸多边形上的基本运算。

约定：y 轴向上的数学坐标系，鞋带公式带符号面积为正表示逆时针。
所有与零的比较都使用容差 eps（默认 EPS），可按调用单独指定。
"""
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple


# 公共常量
EPS = 1e-6


class WiseType(Enum):
    NONE = 0
    CLOCKWISE = 1
    ANTICLOCKWISE = 2


class LocPosition(Enum):
    OUTSIDE = 0
    ON_LINE = 1
    INSIDE = 2


@dataclass(frozen=True, eq=False)
class Point:
    """二维点/向量，支持下标与解包：p[0] == p.x, x, y = p"""
    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __len__(self) -> int:
        return 2

    def __getitem__(self, i: int) -> float:
        return (self.x, self.y)[i]

    # 容差相等；因此 Point 不可哈希
    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return point_eq(self, other)

    __hash__ = None

    def __add__(self, p: 'Point') -> 'Point':
        return Point(self.x + p.x, self.y + p.y)

    def __sub__(self, p: 'Point') -> 'Point':
        return Point(self.x - p.x, self.y - p.y)

    def __mul__(self, t: float) -> 'Point':
        return Point(self.x * t, self.y * t)

    __rmul__ = __mul__

    def __truediv__(self, t: float) -> 'Point':
        return Point(self.x / t, self.y / t)

    def __neg__(self) -> 'Point':
        return Point(-self.x, -self.y)

    def dot(self, p: 'Point') -> float:
        return self.x * p.x + self.y * p.y

    def cross(self, p: 'Point') -> float:
        """叉积 self x p"""
        return self.x * p.y - self.y * p.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def norm_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self) -> 'Point':
        return self / self.norm()

    def distance(self, p: 'Point') -> float:
        return (self - p).norm()

    def is_zero(self, eps: float = EPS) -> bool:
        return abs(self.x) <= eps and abs(self.y) <= eps

    def angle(self, p: 'Point') -> float:
        """与向量 p 的夹角，范围 [0, pi]"""
        return abs(math.atan2(self.cross(p), self.dot(p)))

    def theta(self) -> float:
        """相对 x 正半轴的极角，范围 [0, 2pi)"""
        a = math.atan2(self.y, self.x)
        if a < 0.0:
            a += 2.0 * math.pi
        return a


Ring = List[Point]


def point_eq(a: Point, b: Point, eps: float = EPS) -> bool:
    """点重合：两个坐标分量之差都不超过 eps"""
    return abs(a[0] - b[0]) <= eps and abs(a[1] - b[1]) <= eps


def as_point(obj) -> Point:
    if isinstance(obj, Point):
        return obj
    try:
        x, y = obj
    except (TypeError, ValueError) as e:
        raise ValueError(f"expected an (x, y) pair, got {obj!r}") from e
    return Point(float(x), float(y))


def make_ring(coords: Sequence) -> Ring:
    """
    由坐标构造顶点序列。支持点对序列 [(x0, y0), (x1, y1), ...]
    或扁平列表 [x0, y0, x1, y1, ...]。
    """
    if len(coords) == 0:
        return []
    if isinstance(coords[0], numbers.Real):
        if len(coords) % 2 != 0:
            raise ValueError(f"flat coordinate list must have even length, got {len(coords)}")
        return [Point(float(coords[i]), float(coords[i + 1])) for i in range(0, len(coords), 2)]
    return [as_point(p) for p in coords]


def dedupe_points(points: Sequence[Point], eps: float = EPS) -> List[Point]:
    """按容差去重，保留首次出现的顺序"""
    out: List[Point] = []
    for p in points:
        if not any(point_eq(p, q, eps) for q in out):
            out.append(p)
    return out


# 叉积
def orient(a: Point, b: Point, c: Point) -> float:
    """叉积 (b-a) x (c-a)"""
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


@dataclass(frozen=True)
class Segment:
    p1: Point
    p2: Point

    def __post_init__(self):
        object.__setattr__(self, 'p1', as_point(self.p1))
        object.__setattr__(self, 'p2', as_point(self.p2))

    def length(self) -> float:
        return self.p1.distance(self.p2)

    def direction(self) -> Point:
        return self.p2 - self.p1


def on_segment(seg: Segment, p: Point, eps: float = EPS) -> bool:
    """判断点 p 是否在线段 seg 上（包含端点）"""
    a, b = seg.p1, seg.p2
    if abs(orient(a, b, p)) > eps:
        return False
    return (min(a.x, b.x) - eps <= p[0] <= max(a.x, b.x) + eps and
            min(a.y, b.y) - eps <= p[1] <= max(a.y, b.y) + eps)


def seg_intersection(seg_a: Segment, seg_b: Segment,
                     eps: float = EPS) -> Optional[Tuple[Point, bool]]:
    """
    计算两条线段所在直线的交点。
    平行或共线返回 None；否则返回 (交点, 交点是否同时落在两条线段上)。
    """
    r = seg_a.direction()
    s = seg_b.direction()
    denom = r.cross(s)
    if abs(denom) <= eps:
        return None
    qp = seg_b.p1 - seg_a.p1
    t = qp.cross(s) / denom
    u = qp.cross(r) / denom
    pt = seg_a.p1 + r * t
    on_both = -eps <= t <= 1.0 + eps and -eps <= u <= 1.0 + eps
    return pt, on_both


def edges(ring: Sequence[Point]) -> Iterator[Segment]:
    """依次给出环的各条边（最后一个顶点连回第一个）"""
    n = len(ring)
    if n < 2:
        return
    for i in range(n):
        yield Segment(ring[i], ring[(i + 1) % n])


def signed_area(ring: Sequence[Point]) -> float:
    """多边形带符号面积（正为逆时针）"""
    a = 0.0
    n = len(ring)
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        a += x1 * y2 - x2 * y1
    return a / 2.0


def polygon_area(ring: Sequence[Point]) -> float:
    if len(ring) < 3:
        return 0.0
    return abs(signed_area(ring))


def which_wise(ring: Sequence[Point], eps: float = EPS) -> WiseType:
    a = signed_area(ring)
    if a > eps:
        return WiseType.ANTICLOCKWISE
    if a < -eps:
        return WiseType.CLOCKWISE
    return WiseType.NONE


def be_in_wise(ring: Ring, wise: WiseType, eps: float = EPS) -> None:
    """原地调整顶点顺序为指定方向；退化环保持不变"""
    if wise is WiseType.NONE:
        return
    current = which_wise(ring, eps)
    if current is WiseType.NONE or current is wise:
        return
    ring.reverse()


def flip(ring: Ring) -> None:
    """翻转方向，第一个顶点位置不变"""
    ring[1:] = ring[:0:-1]


def has_repeat_vertex(ring: Sequence[Point], eps: float = EPS) -> bool:
    """是否存在相邻（含首尾）重合的顶点"""
    n = len(ring)
    if n < 2:
        return False
    return any(point_eq(ring[i], ring[(i + 1) % n], eps) for i in range(n))


def is_convex(ring: Sequence[Point], eps: float = EPS) -> bool:
    n = len(ring)
    if n < 3:
        return False
    wise = which_wise(ring, eps)
    if wise is WiseType.NONE:
        return False
    sign = -1.0 if wise is WiseType.CLOCKWISE else 1.0
    for i in range(n):
        # 共线的相邻边叉积为 0，允许
        if orient(ring[i], ring[(i + 1) % n], ring[(i + 2) % n]) * sign < -eps:
            return False
    return True


def location(ring: Sequence[Point], p: Point, eps: float = EPS) -> LocPosition:
    """
    判断点 p 相对凸多边形 ring 的位置。
    顺时针时内部在每条有向边的右侧（叉积 <= 0）；逆时针环取反后同样处理。
    """
    wise = which_wise(ring, eps)
    if wise is WiseType.NONE:
        # 退化环：只区分在边上与在外部
        for edge in edges(ring):
            if on_segment(edge, p, eps):
                return LocPosition.ON_LINE
        return LocPosition.OUTSIDE

    sign = 1.0 if wise is WiseType.CLOCKWISE else -1.0
    on_line = False
    n = len(ring)
    for i in range(n):
        c = orient(ring[i], ring[(i + 1) % n], p) * sign
        if c > eps:
            return LocPosition.OUTSIDE
        if c >= -eps:
            on_line = True
    return LocPosition.ON_LINE if on_line else LocPosition.INSIDE


def inter_pts(ring: Sequence[Point], seg: Segment, eps: float = EPS) -> List[Point]:
    """线段与多边形各边的交点（同时在两条线段上），按容差去重"""
    pts: List[Point] = []
    for edge in edges(ring):
        hit = seg_intersection(seg, edge, eps)
        if hit is None:
            continue
        pt, on_both = hit
        if on_both and not any(point_eq(pt, q, eps) for q in pts):
            pts.append(pt)
    return pts


@dataclass
class ConvexPolygon:
    """凸多边形；vertices 为隐式闭合的顶点序列"""
    vertices: Ring = field(default_factory=list)

    def __post_init__(self):
        self.vertices = [as_point(p) for p in self.vertices]

    @classmethod
    def quad(cls, p1, p2, p3, p4) -> 'ConvexPolygon':
        """四边形，约定按顺时针给出顶点"""
        return cls([p1, p2, p3, p4])

    @classmethod
    def from_coords(cls, coords: Sequence) -> 'ConvexPolygon':
        return cls(make_ring(coords))

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)

    def __getitem__(self, i: int) -> Point:
        return self.vertices[i]

    def copy(self) -> 'ConvexPolygon':
        return ConvexPolygon(list(self.vertices))

    def edges(self) -> List[Segment]:
        return list(edges(self.vertices))

    def signed_area(self) -> float:
        return signed_area(self.vertices)

    def area(self) -> float:
        return polygon_area(self.vertices)

    def which_wise(self, eps: float = EPS) -> WiseType:
        return which_wise(self.vertices, eps)

    def is_clockwise(self) -> bool:
        return self.which_wise() is WiseType.CLOCKWISE

    def is_anticlockwise(self) -> bool:
        return self.which_wise() is WiseType.ANTICLOCKWISE

    def be_in_wise(self, wise: WiseType, eps: float = EPS) -> None:
        be_in_wise(self.vertices, wise, eps)

    def be_clockwise(self) -> None:
        self.be_in_wise(WiseType.CLOCKWISE)

    def be_anticlockwise(self) -> None:
        self.be_in_wise(WiseType.ANTICLOCKWISE)

    def flip(self) -> None:
        flip(self.vertices)

    def has_repeat_vertex(self, eps: float = EPS) -> bool:
        return has_repeat_vertex(self.vertices, eps)

    def is_convex(self, eps: float = EPS) -> bool:
        return is_convex(self.vertices, eps)

    def location(self, p, eps: float = EPS) -> LocPosition:
        return location(self.vertices, as_point(p), eps)

    def inter_pts(self, seg: Segment, eps: float = EPS) -> List[Point]:
        return inter_pts(self.vertices, seg, eps)
