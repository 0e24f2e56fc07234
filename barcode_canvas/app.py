from __future__ import annotations
import sys
from PySide6 import QtCore
from PySide6.QtWidgets import QApplication
from .ui.main_window import MainWindow
from .ui.main_window_impl import APP_VERSION
from .ui.settings import APP_NAME, ORG_NAME


def main():
    QtCore.QCoreApplication.setOrganizationName(ORG_NAME)
    QtCore.QCoreApplication.setApplicationName(APP_NAME)
    QtCore.QCoreApplication.setApplicationVersion(APP_VERSION)

    app = QApplication(sys.argv)

    win = MainWindow()
    win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
