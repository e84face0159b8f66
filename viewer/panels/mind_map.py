"""
viewer/panels/mind_map.py -- Mind map visualization panel.

Interactive node-edge diagram of entries and their connections using
QGraphicsView/QGraphicsScene with a NetworkX spring layout.

Features:
- EntryNode items (coloured boxes with light labels, colour by type)
- ConnectionEdge items (directed arrows)
- Zoom/pan via mouse wheel and drag, double-click a node to open it
- Hover tooltips showing the entry summary
- Reset (discard and rebuild) and Save Image (PNG export)

The panel keeps nothing between builds: every ``show_mind_map`` call
clears the scene and lays the graph out again.
"""

from __future__ import annotations

import logging
import math

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QImage,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPen,
    QWheelEvent,
)
from PySide6.QtWidgets import (
    QFileDialog,
    QGraphicsItem,
    QGraphicsPathItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
    QGraphicsView,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from archive.errors import GraphExportError
from archive.graph import compute_layout
from archive.render import MindMap
from viewer.services.event_bus import EventBus
from viewer.widgets.notes_box import NotesBox

logger = logging.getLogger(__name__)

# Type-to-colour mapping
TYPE_COLORS: dict[str, str] = {
    "Person": "#A0522D",
    "Movement": "#DAA520",
    "Event": "#F8F8FF",
}
DEFAULT_COLOR = "#778899"
HIGHLIGHT_COLOR = "#DAA520"
LABEL_COLOR = "#F8F8FF"
# Dark label on the near-white Event boxes
DARK_LABEL_COLOR = "#2b1d14"
EDGE_COLOR = "#DAA520"
BACKGROUND_COLOR = "#1e1510"

NODE_MARGIN = 10
EXPORT_PADDING = 40
DEFAULT_EXPORT_NAME = "Black-Unity-Archive-Mindmap.png"
EMPTY_MESSAGE = "No entries to map."
LAYOUT_FAILED_MESSAGE = "The mind map could not be laid out."


def color_for(category: str) -> str:
    return TYPE_COLORS.get(category, DEFAULT_COLOR)


class EntryNode(QGraphicsRectItem):
    """A labelled box representing one entry in the diagram."""

    def __init__(
        self,
        entity_id: str,
        label: str,
        tooltip: str,
        category: str,
        x: float,
        y: float,
        parent: QGraphicsItem | None = None,
    ):
        super().__init__(parent)
        self.entity_id = entity_id
        self.category = category
        self.edges: list[ConnectionEdge] = []

        self._label = QGraphicsSimpleTextItem(label, self)
        self._label.setFont(QFont("Georgia", 12))
        text_color = DARK_LABEL_COLOR if category == "Event" else LABEL_COLOR
        self._label.setBrush(QBrush(QColor(text_color)))

        text_rect = self._label.boundingRect()
        w = text_rect.width() + 2 * NODE_MARGIN
        h = text_rect.height() + 2 * NODE_MARGIN
        self.setRect(-w / 2, -h / 2, w, h)
        self._label.setPos(-text_rect.width() / 2, -text_rect.height() / 2)

        self.setBrush(QBrush(QColor(color_for(category))))
        self.setPen(QPen(QColor("#FFFFFF"), 1))
        self.setPos(x, y)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsSelectable)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemSendsGeometryChanges)
        self.setAcceptHoverEvents(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(tooltip or label)

    @property
    def label(self) -> str:
        return self._label.text()

    def set_highlight(self, on: bool) -> None:
        color = HIGHLIGHT_COLOR if on else color_for(self.category)
        self.setBrush(QBrush(QColor(color)))

    def itemChange(self, change, value):
        if change == QGraphicsItem.GraphicsItemChange.ItemPositionHasChanged:
            for edge in self.edges:
                edge.update_path()
        return super().itemChange(change, value)


class ConnectionEdge(QGraphicsPathItem):
    """A directed edge (arrow) from one entry node to another."""

    def __init__(self, source: EntryNode, target: EntryNode, parent: QGraphicsItem | None = None):
        super().__init__(parent)
        self.source = source
        self.target = target

        color = QColor(EDGE_COLOR)
        color.setAlphaF(0.4)
        self.setPen(QPen(color, 2))
        self.setZValue(-1)  # Draw edges behind nodes

        source.edges.append(self)
        target.edges.append(self)
        self.update_path()

    def update_path(self) -> None:
        """Recalculate the edge path with an arrowhead at the target box."""
        src = self.source.pos()
        tgt = self.target.pos()

        dx = tgt.x() - src.x()
        dy = tgt.y() - src.y()
        length = math.sqrt(dx * dx + dy * dy)
        if length < 0.001:
            self.setPath(QPainterPath())
            return

        # Stop short of the target box edge
        half = self.target.rect()
        inset = min(
            abs(half.width() / 2 / dx) if dx else math.inf,
            abs(half.height() / 2 / dy) if dy else math.inf,
        )
        inset = min(inset, 1.0)
        end = QPointF(tgt.x() - dx * inset, tgt.y() - dy * inset)

        path = QPainterPath()
        path.moveTo(src)
        path.lineTo(end)

        arrow_size = 10
        angle = math.atan2(dy, dx)
        for offset in (-math.pi / 6, math.pi / 6):
            path.moveTo(end)
            path.lineTo(
                end.x() - arrow_size * math.cos(angle + offset),
                end.y() - arrow_size * math.sin(angle + offset),
            )

        self.setPath(path)


class MindMapView(QGraphicsView):
    """QGraphicsView with zoom/pan and double-click-to-open support."""

    def __init__(self, scene: QGraphicsScene, parent: QWidget | None = None):
        super().__init__(scene, parent)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.AnchorViewCenter)
        self.setBackgroundBrush(QBrush(QColor(BACKGROUND_COLOR)))
        self._zoom = 0

        # Callback set by MindMapPanel
        self.node_activated = None  # callable(node: EntryNode)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out with mouse wheel."""
        factor = 1.15
        if event.angleDelta().y() > 0:
            if self._zoom < 20:
                self.scale(factor, factor)
                self._zoom += 1
        else:
            if self._zoom > -20:
                self.scale(1 / factor, 1 / factor)
                self._zoom -= 1

    def fit_all(self) -> None:
        """Fit all items in view."""
        rect = self.scene().itemsBoundingRect()
        if not rect.isNull():
            rect.adjust(-50, -50, 50, 50)
            self.fitInView(rect, Qt.AspectRatioMode.KeepAspectRatio)
            self._zoom = 0

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        item = self.scene().itemAt(self.mapToScene(event.pos()), self.transform())
        node = self._find_entry_node(item)
        if node is not None and self.node_activated is not None:
            self.node_activated(node)
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    @staticmethod
    def _find_entry_node(item) -> EntryNode | None:
        """Walk up the QGraphicsItem parent chain to find an EntryNode."""
        while item is not None:
            if isinstance(item, EntryNode):
                return item
            item = item.parentItem()
        return None


class MindMapPanel(QWidget):
    """Relationship diagram with Reset and Save Image actions."""

    def __init__(self, note_key: str, parent: QWidget | None = None):
        super().__init__(parent)
        self._bus = EventBus.instance()
        self._nodes: dict[str, EntryNode] = {}
        self._edges: list[ConnectionEdge] = []
        self._selected_node: EntryNode | None = None
        self._ready = False
        self._setup_ui(note_key)
        self._connect_signals()

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------

    def _setup_ui(self, note_key: str) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        toolbar = QHBoxLayout()
        toolbar.setSpacing(4)
        toolbar.addWidget(QLabel("Mind Map"))

        self._reset_btn = QPushButton("Reset Map")
        self._reset_btn.setMaximumWidth(90)
        toolbar.addWidget(self._reset_btn)

        self._save_btn = QPushButton("Save Image")
        self._save_btn.setMaximumWidth(90)
        toolbar.addWidget(self._save_btn)

        toolbar.addStretch()

        self._count_label = QLabel("0 nodes, 0 edges")
        self._count_label.setStyleSheet("color: #888; font-size: 11px;")
        toolbar.addWidget(self._count_label)
        layout.addLayout(toolbar)

        self._scene = QGraphicsScene(self)
        self._view = MindMapView(self._scene)
        self._view.node_activated = self._on_node_activated
        layout.addWidget(self._view, 3)

        self._empty_label = QLabel(EMPTY_MESSAGE)
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet("color: #666; font-style: italic; font-size: 13px;")
        self._empty_label.setVisible(False)
        layout.addWidget(self._empty_label)

        self._notes = NotesBox(note_key)
        layout.addWidget(self._notes, 1)

    def _connect_signals(self) -> None:
        self._reset_btn.clicked.connect(self._bus.mind_map_reset_requested.emit)
        self._save_btn.clicked.connect(self._on_save_clicked)
        self._scene.selectionChanged.connect(self._on_selection_changed)

    # ------------------------------------------------------------------
    # Graph building
    # ------------------------------------------------------------------

    @property
    def notes_box(self) -> NotesBox:
        return self._notes

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def node_ids(self) -> list[str]:
        return list(self._nodes)

    @property
    def edge_pairs(self) -> list[tuple[str, str]]:
        return [(e.source.entity_id, e.target.entity_id) for e in self._edges]

    def _show_placeholder(self, message: str) -> None:
        self._empty_label.setText(message)
        self._empty_label.setVisible(True)
        self._view.setVisible(False)

    def clear(self) -> None:
        self._ready = False
        self._selected_node = None
        self._scene.clear()
        self._nodes.clear()
        self._edges.clear()

    def show_mind_map(self, mind_map: MindMap) -> None:
        """Discard the current scene and draw *mind_map* from scratch."""
        self.clear()

        self._count_label.setText("0 nodes, 0 edges")

        if mind_map.node_count == 0:
            self._show_placeholder(EMPTY_MESSAGE)
            return

        try:
            positions = compute_layout(mind_map)
        except Exception as e:
            logger.exception("NetworkX layout failed")
            self._show_placeholder(LAYOUT_FAILED_MESSAGE)
            self._bus.error_occurred.emit(f"{LAYOUT_FAILED_MESSAGE} ({e})")
            return

        self._empty_label.setVisible(False)
        self._view.setVisible(True)

        for node in mind_map.nodes:
            x, y = positions.get(node.id, (0.0, 0.0))
            item = EntryNode(node.id, node.label, node.tooltip, node.category, x, y)
            self._scene.addItem(item)
            self._nodes[node.id] = item

        for edge in mind_map.edges:
            source = self._nodes.get(edge.source)
            target = self._nodes.get(edge.target)
            if source is None or target is None:
                continue
            item = ConnectionEdge(source, target)
            self._scene.addItem(item)
            self._edges.append(item)

        self._count_label.setText(f"{len(self._nodes)} nodes, {len(self._edges)} edges")
        self._ready = True

        # Fit to view after a brief delay (let the page become visible)
        QTimer.singleShot(50, self._view.fit_all)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_image(self, path: str) -> None:
        """Render the whole scene to a PNG at *path*.

        Raises
        ------
        GraphExportError
            Nothing has been laid out yet.
        OSError
            The image could not be written.
        """
        if not self._ready or not self._nodes:
            raise GraphExportError("mind map layout is not ready")

        source = self._scene.itemsBoundingRect().adjusted(
            -EXPORT_PADDING, -EXPORT_PADDING, EXPORT_PADDING, EXPORT_PADDING,
        )
        image = QImage(
            max(1, math.ceil(source.width())),
            max(1, math.ceil(source.height())),
            QImage.Format.Format_ARGB32,
        )
        image.fill(QColor(BACKGROUND_COLOR))

        painter = QPainter(image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._scene.render(painter, QRectF(image.rect()), source)
        painter.end()

        if not image.save(path, "PNG"):
            raise OSError(f"could not write image to {path}")
        logger.info("Saved mind map image to %s", path)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_save_clicked(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Mind Map", DEFAULT_EXPORT_NAME, "PNG Images (*.png)",
        )
        if path:
            self._bus.mind_map_export_requested.emit(path)

    def _on_selection_changed(self) -> None:
        if self._selected_node is not None:
            self._selected_node.set_highlight(False)
            self._selected_node = None

        for item in self._scene.selectedItems():
            if isinstance(item, EntryNode):
                item.set_highlight(True)
                self._selected_node = item
                break

    def _on_node_activated(self, node: EntryNode) -> None:
        self._bus.entity_selected.emit(node.entity_id)
