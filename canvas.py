# canvas.py
"""
CanvasWidget: 负责绘制凸多边形、鼠标交互，并显示两个多边形的交集与 IoU
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import pyqtSignal, QPointF, Qt
from PyQt5.QtGui import QPainter, QPen, QBrush, QColor, QPolygonF

from geometry import ConvexPolygon, Point, Ring, WiseType, has_repeat_vertex, is_convex, which_wise
from convex_iou import iou_from_areas, overlap

logger = logging.getLogger(__name__)


@dataclass
class DrawnPolygon:
    polygon: ConvexPolygon
    in_operation_area: bool = False
    # 操作区中第二个放入的多边形记为 B
    is_second: bool = False


class CanvasWidget(QWidget):
    polygon_added = pyqtSignal()
    polygons_changed = pyqtSignal()

    def __init__(self):
        super().__init__()
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.ClickFocus)
        self.polygons: List[DrawnPolygon] = []  # 已构建的多边形列表
        self.current_points: List[Point] = []  # 当前未闭合的点

        # 计算结果
        self.intersection_ring: Ring = []
        self.result_text = ""

        self.info_text = "左键：添加点；右键/闭合按钮：闭合凸多边形；双击列表项：移入/移出操作区"

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.add_point(event.x(), event.y())
        elif event.button() == Qt.RightButton:
            self.close_current_polygon()

    def add_point(self, x: float, y: float):
        self.current_points.append(Point(float(x), float(y)))
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QBrush(QColor(255, 255, 255)))

        # 先填充交集，边框画在上层
        if self.intersection_ring:
            self._draw_intersection(painter)

        self._draw_operation_polygons(painter)
        self._draw_draft_polygons(painter)
        self._draw_current_points(painter)

        painter.setPen(QColor(0, 0, 0))
        margin = 10
        rect = self.rect().adjusted(margin, margin, -margin, -margin)
        if self.result_text:
            painter.drawText(rect, Qt.AlignTop | Qt.AlignLeft, self.result_text)
        painter.drawText(rect, Qt.AlignBottom | Qt.AlignLeft, self.info_text)

    def _draw_operation_polygons(self, painter):
        """绘制操作区多边形：A 黑色，B 红色"""
        for item in self.polygons:
            if not item.in_operation_area:
                continue
            color = QColor(255, 0, 0) if item.is_second else QColor(0, 0, 0)
            painter.setPen(QPen(color, 2))
            painter.setBrush(Qt.NoBrush)
            self._draw_ring(painter, item.polygon.vertices)

    def _draw_draft_polygons(self, painter):
        """绘制绘制区多边形（灰色实线）"""
        painter.setPen(QPen(QColor(128, 128, 128), 2))
        painter.setBrush(Qt.NoBrush)
        for item in self.polygons:
            if item.in_operation_area:
                continue
            self._draw_ring(painter, item.polygon.vertices)

    def _draw_intersection(self, painter):
        # 半透明绿色填充
        painter.setBrush(QBrush(QColor(0, 255, 0, 100)))
        painter.setPen(Qt.NoPen)
        painter.drawPolygon(QPolygonF([QPointF(p.x, p.y) for p in self.intersection_ring]))

    def _draw_current_points(self, painter):
        """当前未闭合的折线（蓝色实线）及顶点"""
        painter.setPen(QPen(QColor(50, 50, 150), 2))
        pts = self.current_points
        for a, b in zip(pts, pts[1:]):
            painter.drawLine(QPointF(a.x, a.y), QPointF(b.x, b.y))

        painter.setBrush(QBrush(QColor(0, 0, 0)))
        for p in pts:
            painter.drawEllipse(QPointF(p.x, p.y), 3, 3)

    def _draw_ring(self, painter, ring: Ring):
        n = len(ring)
        if n < 2:
            return
        for i in range(n):
            a = ring[i]
            b = ring[(i + 1) % n]
            painter.drawLine(QPointF(a.x, a.y), QPointF(b.x, b.y))

    def close_current_polygon(self) -> bool:
        """闭合当前点序列为凸多边形；失败时原因写入 info_text"""
        ring = list(self.current_points)
        if len(ring) > 1 and ring[0] == ring[-1]:
            ring = ring[:-1]

        if len(ring) < 3:
            self.info_text = "至少需要 3 个顶点才能闭合多边形"
            self.update()
            return False
        if has_repeat_vertex(ring):
            self.info_text = "存在相邻重复顶点，请清除后重画"
            self.update()
            return False
        if not is_convex(ring):
            self.info_text = "只支持凸多边形（或顶点共线），请重画"
            self.current_points = []
            self.update()
            return False

        poly = ConvexPolygon(ring)
        if which_wise(ring) is not WiseType.CLOCKWISE:
            logger.info("polygon drawn anticlockwise, reversing to clockwise")
            poly.be_clockwise()

        self.polygons.append(DrawnPolygon(poly))
        self.current_points = []
        self.polygon_added.emit()
        self.update()
        return True

    def operation_polygons(self) -> List[DrawnPolygon]:
        return [item for item in self.polygons if item.in_operation_area]

    def compute_iou_and_show(self) -> Optional[float]:
        """对操作区的 A、B 计算交集与 IoU 并显示"""
        first = second = None
        for item in self.operation_polygons():
            if item.is_second:
                second = item.polygon
            else:
                first = item.polygon
        if first is None or second is None:
            raise RuntimeError("请在操作区放置两个多边形")

        ring, inter, union = overlap(first, second)
        self.intersection_ring = ring
        self.result_text = ""
        self.update()

        value = iou_from_areas(inter, union)
        self.result_text = (
            f"交集面积 {inter:.2f}  "
            f"并集面积 {union:.2f}  "
            f"IoU {value:.4f}"
        )
        logger.info("IoU computed: %.6f", value)
        self.update()
        return value

    def clear_result(self):
        self.intersection_ring = []
        self.result_text = ""
        self.update()

    def clear_all(self):
        """清空所有内容"""
        self.polygons = []
        self.current_points = []
        self.clear_result()
        self.polygons_changed.emit()
