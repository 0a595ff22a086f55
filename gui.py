import logging
import sys

from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QWidget, QPushButton, QListWidget, QListWidgetItem,
    QHBoxLayout, QVBoxLayout, QLabel, QMessageBox, QFrame
)
from PyQt5.QtCore import Qt
from canvas import CanvasWidget
from convex_iou import UndefinedIoUError

logger = logging.getLogger(__name__)


def list_frame(title):
    """带边框的标题 + 列表，返回 (frame, list_widget)"""
    frame = QFrame()
    frame.setFrameStyle(QFrame.Box)
    poly_list = QListWidget()
    layout = QVBoxLayout(frame)
    layout.addWidget(QLabel(title))
    layout.addWidget(poly_list)
    return frame, poly_list


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("凸多边形 IoU 演示")
        self.resize(1200, 800)

        self.canvas = CanvasWidget()
        operation_frame, self.operation_list = list_frame("操作区（A 黑色，B 红色）")
        drawing_frame, self.drawing_list = list_frame("绘制区（双击移入操作区）")

        side_panel = QWidget()
        side_panel.setMaximumWidth(300)
        side_layout = QVBoxLayout(side_panel)
        side_layout.addWidget(operation_frame)
        side_layout.addWidget(drawing_frame)

        toolbar = QHBoxLayout()
        for text, slot in (("闭合多边形", self.on_close_polygon),
                           ("计算 IoU", self.on_compute),
                           ("清空", self.on_clear)):
            button = QPushButton(text)
            button.clicked.connect(slot)
            toolbar.addWidget(button)
        toolbar.addStretch()

        body = QHBoxLayout()
        body.addWidget(self.canvas, 3)
        body.addWidget(side_panel, 1)

        central = QWidget()
        root = QVBoxLayout(central)
        root.addLayout(toolbar)
        root.addLayout(body, 1)
        self.setCentralWidget(central)

        self.operation_list.itemDoubleClicked.connect(
            lambda list_item: self.move_to_drawing_area(list_item.data(Qt.UserRole)))
        self.drawing_list.itemDoubleClicked.connect(
            lambda list_item: self.move_to_operation_area(list_item.data(Qt.UserRole)))
        self.canvas.polygon_added.connect(self.refresh_poly_lists)
        self.canvas.polygons_changed.connect(self.refresh_poly_lists)

        self.refresh_poly_lists()

    def on_close_polygon(self):
        if not self.canvas.close_current_polygon():
            QMessageBox.information(self, "提示", self.canvas.info_text)

    def on_compute(self):
        try:
            self.canvas.compute_iou_and_show()
        except UndefinedIoUError:
            QMessageBox.information(self, "提示", "两个多边形面积均为 0，IoU 无定义")
        except Exception as e:
            logger.exception("IoU computation failed")
            QMessageBox.critical(self, "计算错误", str(e))

    def on_clear(self):
        self.canvas.clear_all()

    def refresh_poly_lists(self):
        """根据 canvas 当前模型刷新两个列表"""
        self.operation_list.clear()
        self.drawing_list.clear()

        for idx, item in enumerate(self.canvas.polygons):
            name = f"多边形 {idx+1}（面积 {item.polygon.area():.1f}）"
            if item.in_operation_area:
                name += "（B）" if item.is_second else "（A）"
            list_item = QListWidgetItem(name)
            list_item.setData(Qt.UserRole, idx)
            if item.in_operation_area:
                self.operation_list.addItem(list_item)
            else:
                self.drawing_list.addItem(list_item)

    def move_to_operation_area(self, idx):
        item = self.canvas.polygons[idx]

        operation_count = len(self.canvas.operation_polygons())
        if operation_count >= 2:
            QMessageBox.information(self, "提示", "操作区最多只能放入两个多边形")
            return

        item.in_operation_area = True
        # 第一个放入的是 A，第二个是 B
        item.is_second = operation_count == 1
        if item.is_second:
            for other in self.canvas.operation_polygons():
                if other is not item:
                    other.is_second = False

        self.canvas.clear_result()
        self.refresh_poly_lists()

    def move_to_drawing_area(self, idx):
        item = self.canvas.polygons[idx]
        item.in_operation_area = False
        item.is_second = False

        self.canvas.clear_result()
        self.refresh_poly_lists()


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
