import math

import pytest

from geometry import (
    EPS, ConvexPolygon, LocPosition, Point, Segment, WiseType,
    as_point, be_in_wise, dedupe_points, flip, has_repeat_vertex, inter_pts, is_convex,
    location, make_ring, on_segment, point_eq, polygon_area, seg_intersection, signed_area,
    which_wise,
)

UNIT_CCW = [(0, 0), (1, 0), (1, 1), (0, 1)]
UNIT_CW = [(0, 0), (0, 1), (1, 1), (1, 0)]


def test_point_indexing_and_unpacking():
    p = Point(3.0, -2.0)
    assert p[0] == 3.0 and p[1] == -2.0
    x, y = p
    assert (x, y) == (3.0, -2.0)
    assert len(p) == 2
    with pytest.raises(IndexError):
        p[2]


def test_point_arithmetic():
    a = Point(1.0, 2.0)
    b = Point(3.0, -1.0)
    assert a + b == Point(4.0, 1.0)
    assert b - a == Point(2.0, -3.0)
    assert a * 2 == Point(2.0, 4.0)
    assert 2 * a == Point(2.0, 4.0)
    assert b / 2 == Point(1.5, -0.5)
    assert a.dot(b) == pytest.approx(1.0)
    assert a.cross(b) == pytest.approx(-7.0)
    assert Point(3.0, 4.0).norm() == pytest.approx(5.0)
    assert Point(3.0, 4.0).norm_squared() == pytest.approx(25.0)
    assert a.distance(a) == 0.0


def test_point_equality_is_tolerance_based():
    assert Point(0.0, 0.0) == Point(EPS / 10, -EPS / 10)
    assert Point(0.0, 0.0) != Point(1e-3, 0.0)
    assert point_eq(Point(0.0, 0.0), Point(1e-3, 0.0), eps=1e-2)
    assert Point(1e-9, 0.0).is_zero()


def test_point_is_not_hashable():
    with pytest.raises(TypeError):
        hash(Point(1.0, 1.0))


@pytest.mark.parametrize("vec, expected", [
    ((1, 0), 0.0),
    ((0, 1), math.pi / 2),
    ((-1, 0), math.pi),
    ((0, -1), 3 * math.pi / 2),
    ((1, -1), 7 * math.pi / 4),
])
def test_theta_range(vec, expected):
    assert as_point(vec).theta() == pytest.approx(expected)


def test_angle_between_vectors():
    assert Point(1, 0).angle(Point(0, 2)) == pytest.approx(math.pi / 2)
    assert Point(1, 0).angle(Point(-1, 0)) == pytest.approx(math.pi)


def test_as_point_rejects_non_pairs():
    with pytest.raises(ValueError):
        as_point((1, 2, 3))
    with pytest.raises(ValueError):
        as_point(5)


def test_make_ring_from_pairs_and_flat_list():
    assert make_ring([(0, 0), (1, 0), (1, 1)]) == [Point(0, 0), Point(1, 0), Point(1, 1)]
    assert make_ring([0, 0, 1, 0, 1, 1]) == [Point(0, 0), Point(1, 0), Point(1, 1)]
    assert make_ring([]) == []
    with pytest.raises(ValueError):
        make_ring([0, 0, 1])


def test_dedupe_points_keeps_first_occurrence():
    pts = [Point(0, 0), Point(1, 1), Point(1e-9, 0), Point(1, 1 + 1e-9), Point(2, 2)]
    assert dedupe_points(pts) == [Point(0, 0), Point(1, 1), Point(2, 2)]


def test_signed_area_and_winding():
    ccw = make_ring(UNIT_CCW)
    cw = make_ring(UNIT_CW)
    assert signed_area(ccw) == pytest.approx(1.0)
    assert signed_area(cw) == pytest.approx(-1.0)
    assert which_wise(ccw) is WiseType.ANTICLOCKWISE
    assert which_wise(cw) is WiseType.CLOCKWISE


def test_area_is_invariant_under_reversal():
    ring = make_ring([(0, 0), (4, 0), (5, 3), (1, 4)])
    assert polygon_area(ring) > 0
    assert polygon_area(ring) == pytest.approx(polygon_area(ring[::-1]))


def test_degenerate_ring_has_no_winding_and_zero_area():
    collinear = make_ring([(0, 0), (1, 1), (2, 2)])
    assert which_wise(collinear) is WiseType.NONE
    assert polygon_area(collinear) == 0.0
    assert polygon_area(make_ring([(0, 0), (1, 1)])) == 0.0
    assert polygon_area([]) == 0.0


@pytest.mark.parametrize("target", [WiseType.CLOCKWISE, WiseType.ANTICLOCKWISE])
@pytest.mark.parametrize("coords", [UNIT_CCW, UNIT_CW, [(0, 0), (3, 1), (1, 2)]])
def test_be_in_wise_reaches_target(coords, target):
    ring = make_ring(coords)
    be_in_wise(ring, target)
    assert which_wise(ring) is target


def test_be_in_wise_leaves_degenerate_ring_unchanged():
    ring = make_ring([(0, 0), (1, 0), (2, 0)])
    before = list(ring)
    be_in_wise(ring, WiseType.CLOCKWISE)
    assert ring == before
    assert which_wise(ring) is WiseType.NONE


def test_flip_keeps_first_vertex():
    ring = make_ring(UNIT_CCW)
    flip(ring)
    assert ring == make_ring(UNIT_CW)
    assert which_wise(ring) is WiseType.CLOCKWISE


def test_has_repeat_vertex():
    assert not has_repeat_vertex(make_ring(UNIT_CCW))
    assert has_repeat_vertex(make_ring([(0, 0), (1, 0), (1, 0), (0, 1)]))
    # 首尾重合也算
    assert has_repeat_vertex(make_ring([(0, 0), (1, 0), (1, 1), (0, 0)]))


def test_is_convex():
    assert is_convex(make_ring(UNIT_CCW))
    assert is_convex(make_ring(UNIT_CW))
    # 含共线顶点的矩形仍为凸
    assert is_convex(make_ring([(0, 0), (1, 0), (2, 0), (2, 1), (0, 1)]))
    assert not is_convex(make_ring([(0, 0), (4, 0), (4, 4), (2, 1), (0, 4)]))
    assert not is_convex(make_ring([(0, 0), (1, 0), (2, 0)]))


@pytest.mark.parametrize("coords", [UNIT_CW, UNIT_CCW])
@pytest.mark.parametrize("pt, expected", [
    ((0.5, 0.5), LocPosition.INSIDE),
    ((1.0, 0.5), LocPosition.ON_LINE),
    ((0.0, 0.0), LocPosition.ON_LINE),
    ((2.0, 0.5), LocPosition.OUTSIDE),
    ((-0.5, -0.5), LocPosition.OUTSIDE),
    ((0.5, 1.0 + 1e-9), LocPosition.ON_LINE),
])
def test_location(coords, pt, expected):
    assert location(make_ring(coords), as_point(pt)) is expected


def test_location_on_degenerate_ring():
    ring = make_ring([(0, 0), (1, 0), (2, 0)])
    assert location(ring, Point(0.5, 0.0)) is LocPosition.ON_LINE
    assert location(ring, Point(0.5, 1.0)) is LocPosition.OUTSIDE


def test_on_segment():
    seg = Segment((0, 0), (2, 2))
    assert on_segment(seg, Point(1, 1))
    assert on_segment(seg, Point(0, 0))
    assert on_segment(seg, Point(2, 2))
    assert not on_segment(seg, Point(3, 3))
    assert not on_segment(seg, Point(1, 0))


def test_seg_intersection_crossing():
    pt, on_both = seg_intersection(Segment((0, 0), (2, 2)), Segment((0, 2), (2, 0)))
    assert pt == Point(1, 1)
    assert on_both


def test_seg_intersection_outside_finite_segments():
    pt, on_both = seg_intersection(Segment((0, 0), (1, 1)), Segment((3, 0), (2, 1)))
    assert pt == Point(1.5, 1.5)
    assert not on_both


def test_seg_intersection_parallel_and_collinear():
    assert seg_intersection(Segment((0, 0), (1, 0)), Segment((0, 1), (1, 1))) is None
    assert seg_intersection(Segment((0, 0), (2, 0)), Segment((1, 0), (3, 0))) is None


def test_inter_pts_through_square():
    ring = make_ring(UNIT_CW)
    pts = inter_pts(ring, Segment((-1, 0.5), (2, 0.5)))
    assert len(pts) == 2
    assert Point(0, 0.5) in pts and Point(1, 0.5) in pts


def test_inter_pts_suppresses_shared_vertex():
    ring = make_ring(UNIT_CW)
    pts = inter_pts(ring, Segment((-1, -1), (2, 2)))
    assert len(pts) == 2
    assert Point(0, 0) in pts and Point(1, 1) in pts


def test_inter_pts_segment_inside_has_no_crossings():
    ring = make_ring(UNIT_CW)
    assert inter_pts(ring, Segment((0.2, 0.2), (0.8, 0.8))) == []


def test_convex_polygon_quad():
    quad = ConvexPolygon.quad((0, 0), (0, 1), (1, 1), (1, 0))
    assert len(quad) == 4
    assert quad.is_clockwise()
    assert quad.area() == pytest.approx(1.0)
    assert quad.location((0.5, 0.5)) is LocPosition.INSIDE
    assert len(quad.edges()) == 4
    assert not quad.has_repeat_vertex()
    assert quad.is_convex()


def test_convex_polygon_winding_changes():
    poly = ConvexPolygon.from_coords([0, 0, 1, 0, 1, 1, 0, 1])
    assert poly.is_anticlockwise()
    copy = poly.copy()
    poly.be_clockwise()
    assert poly.is_clockwise()
    assert copy.is_anticlockwise()
    poly.flip()
    assert poly.which_wise() is WiseType.ANTICLOCKWISE
    assert poly[0] == Point(0, 1)
