# NOTE: For displaying the rendered image in a GUI,
#       please download PyQt5.
#
# Installation (in terminal):
#   pip install PyQt5
import sys
from PyQt5.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QPushButton, QLabel,
    QFileDialog, QTextEdit, QPlainTextEdit, QHBoxLayout
)
from PyQt5.QtGui import QFontDatabase
from bmp_errors import BMPError
from bmp_text import format_grid, format_info
from config import ViewerConfig


class BMPViewer(QWidget):
    def __init__(self, config=None):
        super().__init__()
        self.setWindowTitle("BMP Viewer")
        self.resize(700, 500)

        self.config = config or ViewerConfig()

        # Last successfully rendered file
        self.current_filepath = None
        self.grid = None
        self.headers = None

        layout = QVBoxLayout()

        top_layout = QHBoxLayout()

        # Button to open BMP file
        self.open_button = QPushButton("Open BMP File")
        self.open_button.setFixedSize(150, 50)
        self.open_button.clicked.connect(self.open_file)
        top_layout.addWidget(self.open_button)

        # Button to append the current render to the log file
        self.log_button = QPushButton("Append to Log")
        self.log_button.setFixedSize(150, 50)
        self.log_button.setEnabled(False)
        self.log_button.clicked.connect(self.append_to_log)
        top_layout.addWidget(self.log_button)

        top_layout.addStretch()
        layout.addLayout(top_layout)

        # Rendered symbols, one character per pixel
        self.image_box = QPlainTextEdit("No Image Loaded")
        self.image_box.setReadOnly(True)
        self.image_box.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.image_box.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))
        self.image_box.setMinimumHeight(300)
        layout.addWidget(self.image_box)

        # Text box to display BMP headers
        layout.addWidget(QLabel("Headers"))
        self.metadata_box = QTextEdit("No Metadata Loaded")
        self.metadata_box.setMinimumHeight(150)
        self.metadata_box.setReadOnly(True)
        layout.addWidget(self.metadata_box)

        self.setLayout(layout)

    # Ask for a BMP file and show it
    def open_file(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Open BMP File", "", "BMP Files (*.bmp)")
        if not filepath:
            return
        self.load_file(filepath)

    def load_file(self, filepath):
        try:
            with self.config.make_parser(filepath) as parser:
                grid = parser.render()
                headers = parser.describe_headers()
        except BMPError as e:
            self.metadata_box.setText(f"Could not open {filepath}:\n{e}")
            return False

        self.current_filepath = filepath
        self.grid = grid
        self.headers = headers

        self.image_box.setPlainText(format_grid(grid))

        # Display metadata
        meta_text = ""
        for section, values in headers.items():
            meta_text += f"{section}:\n"
            for k, v in values.items():
                meta_text += f"  {k}: {v}\n"
        self.metadata_box.setText(meta_text)

        self.log_button.setEnabled(True)
        return True

    # Same output as "bmp-text <file> 2"
    def append_to_log(self):
        if self.grid is None:
            return
        try:
            with open(self.config.log_path, "a", encoding="utf-8") as log_file:
                log_file.write(format_info(self.headers, self.current_filepath))
                log_file.write(format_grid(self.grid))
        except OSError as e:
            self.metadata_box.append(f"Could not write {self.config.log_path}: {e}")
            return False
        self.metadata_box.append(f"Appended to {self.config.log_path}")
        return True


def run():
    app = QApplication(sys.argv)
    viewer = BMPViewer()
    viewer.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(run())
