"""Desktop tool for drawing two rectangles and saving their center distance."""

from typing import List, Optional

from PyQt5.QtCore import QPointF, QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QTableWidget,
    QTableWidgetItem,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from rectmeasure.config import Settings
from rectmeasure.controller import MeasurementController
from rectmeasure.geometry import distance, format_dimensions, format_distance, format_timestamp
from rectmeasure.logging_config import setup_logging
from rectmeasure.persistence import JsonFileStorage, RecordStore
from rectmeasure.records import DEFAULT_SORT, MeasurementRecord, query_records, toggle_sort
from rectmeasure.rendering import CenterMarker, DashedLine, DrawCommand, GridLine, RoundedRect
from rectmeasure.surface import MAX_RECTANGLES, DrawingSurface


def _qcolor(value: str) -> QColor:
    """Parse ``#rrggbb`` and ``rgba(r, g, b, a)`` strings."""

    if value.startswith("rgba("):
        parts = [part.strip() for part in value[5:-1].split(",")]
        red, green, blue = (int(part) for part in parts[:3])
        color = QColor(red, green, blue)
        color.setAlphaF(float(parts[3]))
        return color
    return QColor(value)


class DrawingCanvas(QWidget):
    """Widget hosting a :class:`DrawingSurface` with a fixed backing resolution."""

    def __init__(self, surface: DrawingSurface, parent=None):
        super().__init__(parent)
        self.surface = surface
        self.surface.on_render = self._on_render
        self._commands: List[DrawCommand] = surface.commands()
        self.setMouseTracking(True)
        self.setMinimumSize(400, 300)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setCursor(Qt.CrossCursor)
        self.setFocusPolicy(Qt.ClickFocus)

    def _on_render(self, commands: List[DrawCommand]):
        self._commands = commands
        self.update()

    def _displayed_size(self):
        return (self.width(), self.height())

    def _backing_size(self):
        return (self.surface.width, self.surface.height)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.surface.pointer_down(event.pos(), self._displayed_size(), self._backing_size())
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self.surface.is_drawing:
            self.surface.pointer_move(event.pos(), self._displayed_size(), self._backing_size())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton and self.surface.is_drawing:
            self.surface.pointer_up(event.pos(), self._displayed_size(), self._backing_size())
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.surface.pointer_leave()
        super().leaveEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), Qt.white)
        painter.scale(self.width() / self.surface.width, self.height() / self.surface.height)
        for command in self._commands:
            if isinstance(command, GridLine):
                painter.setPen(QPen(_qcolor(command.color), command.width))
                painter.drawLine(
                    QPointF(command.start.x, command.start.y),
                    QPointF(command.end.x, command.end.y),
                )
            elif isinstance(command, RoundedRect):
                rect = command.rect
                path = QPainterPath()
                path.addRoundedRect(QRectF(rect.x, rect.y, rect.width, rect.height), command.radius, command.radius)
                painter.setPen(QPen(_qcolor(command.style.stroke), 2))
                painter.setBrush(QBrush(_qcolor(command.style.fill)))
                painter.drawPath(path)
            elif isinstance(command, CenterMarker):
                color = _qcolor(command.color)
                painter.setPen(QPen(color))
                painter.setBrush(QBrush(color))
                painter.drawEllipse(QPointF(command.point.x, command.point.y), command.radius, command.radius)
            elif isinstance(command, DashedLine):
                pen = QPen(_qcolor(command.color), command.width)
                pen.setDashPattern([float(step) for step in command.dash])
                painter.setPen(pen)
                painter.setBrush(Qt.NoBrush)
                painter.drawLine(
                    QPointF(command.start.x, command.start.y),
                    QPointF(command.end.x, command.end.y),
                )
        painter.end()


class MeasurementWindow(QMainWindow):
    TABLE_COLUMNS = ["Rectangles", "Distance", "Time", ""]
    SORTABLE_COLUMNS = {1: "distance", 2: "timestamp"}

    def __init__(self, settings: Settings):
        super().__init__()
        self.setWindowTitle("Rectangle Distance Measurement")
        self.resize(1200, 800)

        store = RecordStore(JsonFileStorage(settings.data_path))
        self.controller = MeasurementController(store)
        self.surface = DrawingSurface(
            width=settings.canvas_width,
            height=settings.canvas_height,
            history_limit=settings.history_limit,
        )
        self.canvas = DrawingCanvas(self.surface, self)
        self.controller.attach_surface(self.surface)
        self.controller.subscribe(self.refresh_view)

        self.sort_field, self.sort_order = DEFAULT_SORT
        self._visible_records: List[MeasurementRecord] = []

        self.status_label = QLabel("Click and drag to draw a rectangle.")
        self.distance_label = QLabel("Distance: -")
        self.history_label = QLabel()

        self.undo_button = QPushButton("Undo")
        self.undo_button.clicked.connect(self.surface.undo)
        self.redo_button = QPushButton("Redo")
        self.redo_button.clicked.connect(self.surface.redo)
        self.clear_button = QPushButton("Clear Canvas")
        self.clear_button.clicked.connect(self.surface.clear)
        self.edit_button = QPushButton("Edit")
        self.edit_button.clicked.connect(self.controller.edit_selected)
        self.save_button = QPushButton("Save Measurement")
        self.save_button.clicked.connect(self.save_measurement)

        controls_text = (
            "Controls:\n"
            "- Left Drag: Draw a rectangle (two at most)\n"
            "- Ctrl+Z: Undo\n"
            "- Ctrl+Shift+Z: Redo\n"
            "- Click a saved row to view it, 'Edit' to change it\n"
        )
        self.control_overview = QTextEdit()
        self.control_overview.setReadOnly(True)
        self.control_overview.setText(controls_text)
        self.control_overview.setMaximumHeight(100)

        button_row = QHBoxLayout()
        button_row.addWidget(self.undo_button)
        button_row.addWidget(self.redo_button)
        button_row.addWidget(self.clear_button)
        button_row.addWidget(self.edit_button)
        button_row.addWidget(self.save_button)
        button_row.addStretch()
        button_row.addWidget(self.distance_label)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search measurements...")
        self.search_input.textChanged.connect(self.populate_table)

        self.table = QTableWidget(0, len(self.TABLE_COLUMNS))
        self.table.setHorizontalHeaderLabels(self.TABLE_COLUMNS)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.horizontalHeader().sectionClicked.connect(self.on_header_clicked)
        self.table.cellClicked.connect(self.on_row_clicked)
        self.count_label = QLabel()

        records_column = QVBoxLayout()
        records_column.addWidget(self.search_input)
        records_column.addWidget(self.table)
        records_column.addWidget(self.count_label, alignment=Qt.AlignRight)

        canvas_column = QVBoxLayout()
        canvas_column.addLayout(button_row)
        canvas_column.addWidget(self.canvas, 1)
        canvas_column.addWidget(self.control_overview)

        layout = QHBoxLayout()
        layout.addLayout(canvas_column, 3)
        layout.addLayout(records_column, 2)

        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)
        self.statusBar().addWidget(self.status_label, 1)
        self.statusBar().addPermanentWidget(self.history_label)

        self.refresh_view()

    def keyPressEvent(self, event):
        modifiers = event.modifiers()
        if event.key() == Qt.Key_Z and self.surface.handle_shortcut(
            "z",
            ctrl=bool(modifiers & Qt.ControlModifier),
            meta=bool(modifiers & Qt.MetaModifier),
            shift=bool(modifiers & Qt.ShiftModifier),
        ):
            event.accept()
            return
        super().keyPressEvent(event)

    def save_measurement(self):
        record = self.controller.save_measurement()
        if record is None:
            self.status_label.setText("Draw two rectangles before saving.")
            return
        self.status_label.setText(f"Saved measurement: {format_distance(record.distance)} px.")

    def refresh_view(self):
        rectangles = self.controller.rectangles
        readonly = self.controller.readonly
        self.undo_button.setEnabled(self.surface.can_undo)
        self.redo_button.setEnabled(self.surface.can_redo)
        stats = self.surface.history.get_stats()
        self.history_label.setText(f"History: {stats['undo_count']} undo / {stats['redo_count']} redo")
        self.clear_button.setEnabled(not readonly)
        self.edit_button.setEnabled(readonly)
        self.save_button.setEnabled(self.controller.can_save and not readonly)
        if len(rectangles) == MAX_RECTANGLES:
            self.distance_label.setText(f"Distance: {format_distance(distance(*rectangles))} px")
        else:
            self.distance_label.setText("Distance: -")
        selected = self.controller.selected_record
        if readonly and selected is not None:
            self.status_label.setText(
                f"Viewing measurement from {format_timestamp(selected.created_at)}. Press 'Edit' to change it."
            )
        elif len(rectangles) < MAX_RECTANGLES:
            self.status_label.setText("Click and drag to draw a rectangle.")
        self.populate_table()

    def populate_table(self, *_):
        records = query_records(
            self.controller.records,
            self.search_input.text(),
            self.sort_field,
            self.sort_order,
        )
        self._visible_records = records
        self.table.setRowCount(len(records))
        for row, record in enumerate(records):
            first, second = record.rectangle_pair
            dims = QTableWidgetItem(f"R1: {format_dimensions(first)}\nR2: {format_dimensions(second)}")
            self.table.setItem(row, 0, dims)
            self.table.setItem(row, 1, QTableWidgetItem(format_distance(record.distance)))
            self.table.setItem(row, 2, QTableWidgetItem(format_timestamp(record.created_at)))
            delete_button = QPushButton("Delete")
            delete_button.clicked.connect(
                lambda _checked=False, record_id=record.id: self.controller.delete_record(record_id)
            )
            self.table.setCellWidget(row, 3, delete_button)
            if record.id == self.controller.selected_id:
                self.table.selectRow(row)
        self.table.resizeRowsToContents()
        suffix = "" if len(records) == 1 else "s"
        self.count_label.setText(f"{len(records)} measurement{suffix} found")

    def on_header_clicked(self, column: int):
        field = self.SORTABLE_COLUMNS.get(column)
        if field is None:
            return
        self.sort_field, self.sort_order = toggle_sort(self.sort_field, self.sort_order, field)
        self.populate_table()

    def on_row_clicked(self, row: int, _column: int):
        record: Optional[MeasurementRecord] = None
        if 0 <= row < len(self._visible_records):
            record = self._visible_records[row]
        if record is not None:
            self.controller.select_record(record)


def main():
    import sys

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    app = QApplication(sys.argv)
    window = MeasurementWindow(settings)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
