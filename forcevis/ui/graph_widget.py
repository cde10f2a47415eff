import logging
import math

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import QTimer, Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QFont, QPainterPath

from ..clock import FrameClock
from ..graph_engine import GraphEngine
from ..interaction import Edit, FrameInput, ProgramState, Simulation, pointer_to_graph, step

logger = logging.getLogger(__name__)


class GraphWidget(QWidget):
    modeChanged = pyqtSignal(str)

    def __init__(self, state, engine=None, parent=None):
        super().__init__(parent)
        self.state = state
        self.engine = engine or GraphEngine()
        self.hovered = []

        # Rendering settings
        self.node_radius = self.engine.settings.hover_radius
        self.node_color = QColor("#00bcd4") # Cyan
        self.hover_color = QColor("#ff9800") # Orange
        self.node_text_color = QColor("#ffffff")
        self.edge_color = QColor("#555555")
        self.bg_color = QColor("#121212")
        self.overlay_color = QColor("#aaaaaa")

        # Input state, sampled once per frame
        self.running = True
        self.pointer_down = False
        self.pointer_px = QPointF()

        # Physics Timer
        self.clock = FrameClock(self.engine.settings.target_fps)
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.frame)
        self.timer.start(int(1000 / self.engine.settings.target_fps))

        self.setMouseTracking(True)
        self.setMinimumSize(120, 120)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def set_state(self, state):
        self.state = state
        self.hovered = []
        self.clock.reset()
        self.update()

    def set_engine(self, engine):
        self.engine = engine
        self.node_radius = engine.settings.hover_radius
        self.clock = FrameClock(engine.settings.target_fps)
        self.timer.setInterval(int(1000 / engine.settings.target_fps))

    def has_area(self):
        return min(self.width(), self.height()) > 0

    def frame(self):
        dt = self.clock.tick()
        if dt is None or not self.has_area():
            return

        frame = FrameInput(
            dt=dt,
            simulation_running=self.running,
            pointer_down=self.pointer_down,
            pointer=self.graph_pointer(),
        )
        previous = type(self.state.mode)
        self.state, self.hovered = step(self.state, frame, self.engine)
        if type(self.state.mode) is not previous:
            self.modeChanged.emit(self.mode_name())
        self.update()

    def mode_name(self):
        match self.state.mode:
            case Simulation():
                return "Simulation"
            case Edit(selected=None):
                return "Edit"
            case Edit(selected=uid):
                return f"Edit (dragging {self.state.graph.nodes[uid].label})"

    # Layout square: the largest centered square that fits the widget
    def _square(self):
        side = min(self.width(), self.height())
        left = (self.width() - side) / 2
        top = (self.height() - side) / 2
        return left, top, side / self.engine.settings.layout_size

    def graph_pointer(self):
        left, top, scale = self._square()
        return pointer_to_graph(
            (self.pointer_px.x() - left) / scale,
            (self.pointer_px.y() - top) / scale,
            self.engine.settings.layout_size,
        )

    def to_screen(self, p):
        left, top, scale = self._square()
        half = self.engine.settings.layout_size / 2
        return QPointF(left + (p.x + half) * scale, top + (half - p.y) * scale)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Fill Background
        painter.fillRect(self.rect(), self.bg_color)
        if not self.has_area():
            return

        graph = self.state.graph
        hovered_ids = {n.uid for n in self.hovered}
        hot_edges = {e.uid for e in graph.edges_touching(hovered_ids)}
        _, _, scale = self._square()
        radius = self.node_radius * scale

        # Draw Edges
        for edge in graph.edges.values():
            n1 = graph.nodes.get(edge.source)
            n2 = graph.nodes.get(edge.target)
            if not (n1 and n2):
                continue
            color = self.hover_color if edge.uid in hot_edges else self.edge_color
            painter.setPen(QPen(color, 2))
            p1 = self.to_screen(n1.position)
            p2 = self.to_screen(n2.position)
            painter.drawLine(p1, p2)
            self._draw_arrowhead(painter, p1, p2, radius, color)

        # Draw Nodes
        font = QFont("Segoe UI", 10)
        painter.setFont(font)

        for node in graph.nodes.values():
            color = self.hover_color if node.uid in hovered_ids else self.node_color
            painter.setBrush(QBrush(color))
            painter.setPen(Qt.PenStyle.NoPen)

            c = self.to_screen(node.position)
            rect = QRectF(c.x() - radius, c.y() - radius, radius * 2, radius * 2)
            painter.drawEllipse(rect)

            # Full label below
            painter.setPen(self.node_text_color)
            painter.drawText(QRectF(c.x() - 50, c.y() + radius + 2, 100, 20),
                             Qt.AlignmentFlag.AlignCenter, node.label)

        self._draw_overlay(painter)

    def _draw_arrowhead(self, painter, p1, p2, radius, color):
        dx = p2.x() - p1.x()
        dy = p2.y() - p1.y()
        dist = math.sqrt(dx*dx + dy*dy)
        if dist <= radius: # Nodes overlap, nowhere to put it
            return

        dx /= dist
        dy /= dist

        # Point on the edge of the destination node
        end_x = p2.x() - dx * radius
        end_y = p2.y() - dy * radius

        arrow_size = 8
        path = QPainterPath()
        path.moveTo(end_x, end_y)
        path.lineTo(end_x - dx * arrow_size + dy * (arrow_size * 0.5),
                    end_y - dy * arrow_size - dx * (arrow_size * 0.5))
        path.lineTo(end_x - dx * arrow_size - dy * (arrow_size * 0.5),
                    end_y - dy * arrow_size + dx * (arrow_size * 0.5))
        path.closeSubpath()
        painter.fillPath(path, color)

    def _draw_overlay(self, painter):
        painter.setPen(self.overlay_color)
        painter.setFont(QFont("Consolas", 10))
        lines = [
            f"Mode: {self.mode_name()}",
            "Space: pause / resume simulation",
            "Drag nodes while paused",
        ]
        if self.hovered:
            lines.append("Hover: " + ", ".join(n.label for n in self.hovered))
        for i, line in enumerate(lines):
            painter.drawText(QPointF(10, 20 + i * 16), line)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Space and not event.isAutoRepeat():
            self.running = not self.running
            logger.info("Simulation %s", "resumed" if self.running else "paused")
            return
        super().keyPressEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.pointer_down = True
            self.pointer_px = event.position()

    def mouseMoveEvent(self, event):
        self.pointer_px = event.position()

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.pointer_down = False
