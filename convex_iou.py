# convex_iou.py
"""
凸多边形求交与 IoU（Intersection over Union）。

求交思路：两个凸多边形的交仍是凸多边形，其顶点只可能是
  1) 一个多边形落在另一个内部（或边上）的顶点；
  2) 两个多边形边与边的交点。
收集这些点并去重后，按绕质心的极角排序即得交多边形的边界顺序。
该排序只在凸的前提下成立。
"""
import logging
from typing import List, Sequence, Tuple, Union

from geometry import EPS, ConvexPolygon, LocPosition, Point, Ring, WiseType
from geometry import be_in_wise, dedupe_points, edges, inter_pts, location, make_ring, polygon_area

logger = logging.getLogger(__name__)

PolygonLike = Union[ConvexPolygon, Sequence]


class UndefinedIoUError(ZeroDivisionError):
    """并集面积为 0（两个退化多边形），IoU 无定义"""


def _clockwise_ring(poly: PolygonLike, eps: float) -> Ring:
    """复制为新的顶点序列并调整为顺时针，不修改调用方的数据"""
    if isinstance(poly, ConvexPolygon):
        ring = list(poly.vertices)
    else:
        ring = make_ring(poly)
    be_in_wise(ring, WiseType.CLOCKWISE, eps)
    return ring


def _inner_points(r1: Ring, r2: Ring, eps: float) -> List[Point]:
    pts = [p for p in r1 if location(r2, p, eps) is not LocPosition.OUTSIDE]
    pts += [p for p in r2 if location(r1, p, eps) is not LocPosition.OUTSIDE]
    return dedupe_points(pts, eps)


def _inter_points(r1: Ring, r2: Ring, eps: float) -> List[Point]:
    # 只扫描 r1 的边即可覆盖所有边-边交点
    pts: List[Point] = []
    for edge in edges(r1):
        pts.extend(inter_pts(r2, edge, eps))
    return dedupe_points(pts, eps)


def find_inner_points(c1: PolygonLike, c2: PolygonLike, eps: float = EPS) -> List[Point]:
    """c1 在 c2 内（含边上）的顶点，以及 c2 在 c1 内（含边上）的顶点"""
    return _inner_points(_clockwise_ring(c1, eps), _clockwise_ring(c2, eps), eps)


def find_inter_points(c1: PolygonLike, c2: PolygonLike, eps: float = EPS) -> List[Point]:
    """c1 与 c2 边界的交点"""
    return _inter_points(_clockwise_ring(c1, eps), _clockwise_ring(c2, eps), eps)


def order_by_angle(points: Sequence[Point]) -> List[Point]:
    """按绕质心的极角升序排列；极角相同时近者在前"""
    if not points:
        return []
    n = len(points)
    center = Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)
    return sorted(points, key=lambda p: ((p - center).theta(), p.distance(center)))


def intersection_polygon(c1: PolygonLike, c2: PolygonLike, eps: float = EPS) -> Ring:
    """
    两个凸多边形的交多边形（顺时针）。
    候选点少于 3 个时交集退化（空、单点或线段），返回空列表。
    """
    r1 = _clockwise_ring(c1, eps)
    r2 = _clockwise_ring(c2, eps)
    candidates = dedupe_points(_inner_points(r1, r2, eps) + _inter_points(r1, r2, eps), eps)
    if len(candidates) < 3:
        logger.debug("degenerate intersection: %d candidate point(s)", len(candidates))
        return []
    ring = order_by_angle(candidates)
    be_in_wise(ring, WiseType.CLOCKWISE, eps)
    return ring


def intersection_area(c1: PolygonLike, c2: PolygonLike, eps: float = EPS) -> float:
    return polygon_area(intersection_polygon(c1, c2, eps))


def overlap(c1: PolygonLike, c2: PolygonLike, eps: float = EPS) -> Tuple[Ring, float, float]:
    """
    一次求交得到 (交多边形, 交集面积, 并集面积)。
    需要同时显示交集与 IoU 的调用方用它避免重复求交。
    """
    a1 = polygon_area(_clockwise_ring(c1, eps))
    a2 = polygon_area(_clockwise_ring(c2, eps))
    ring = intersection_polygon(c1, c2, eps)
    inter = polygon_area(ring)
    # 浮点误差可能使并集略小于 0
    union = max(0.0, a1 + a2 - inter)
    return ring, inter, union


def union_area(c1: PolygonLike, c2: PolygonLike, eps: float = EPS) -> float:
    return overlap(c1, c2, eps)[2]


def iou_from_areas(inter: float, union: float, eps: float = EPS) -> float:
    if union <= eps:
        raise UndefinedIoUError(f"union area {union!r} is zero, IoU is undefined")
    logger.debug("intersection=%.6g union=%.6g", inter, union)
    return inter / union


def iou(c1: PolygonLike, c2: PolygonLike, eps: float = EPS) -> float:
    """
    交并比 = 交集面积 / 并集面积。

    eps 是绝对容差，同时用于叉积、行列式和鞋带面积的判零。
    默认 EPS 适合像素量级的坐标。坐标量级很小时（面积接近或小于 EPS），
    多边形会被当作退化：交集面积为 0，结果是 0.0，或并集也不超过 eps 而抛出
    UndefinedIoUError。
    这种情况下应传入与坐标量级相称的 eps（约为 面积 * 1e-6），
    或先把坐标放大到同一尺度。

    Raises:
        UndefinedIoUError: 并集面积不超过 eps 时。
    """
    _, inter, union = overlap(c1, c2, eps)
    return iou_from_areas(inter, union, eps)


def pairwise_iou(polys1: Sequence[PolygonLike], polys2: Sequence[PolygonLike],
                 eps: float = EPS) -> List[List[float]]:
    """
    两组多边形两两之间的 IoU。

    Returns:
        N x M 嵌套列表，第 i 行第 j 列为 iou(polys1[i], polys2[j])。
    """
    return [[iou(a, b, eps) for b in polys2] for a in polys1]


# 四边形便捷接口
def _require_quad(q: PolygonLike, eps: float) -> Ring:
    ring = _clockwise_ring(q, eps)
    if len(ring) != 4:
        raise ValueError(f"a quad needs exactly 4 vertices, got {len(ring)}")
    return ring


def quad_intersection_area(q1: PolygonLike, q2: PolygonLike, eps: float = EPS) -> float:
    return intersection_area(_require_quad(q1, eps), _require_quad(q2, eps), eps)


def quad_union_area(q1: PolygonLike, q2: PolygonLike, eps: float = EPS) -> float:
    return union_area(_require_quad(q1, eps), _require_quad(q2, eps), eps)


def quad_iou(q1: PolygonLike, q2: PolygonLike, eps: float = EPS) -> float:
    return iou(_require_quad(q1, eps), _require_quad(q2, eps), eps)
