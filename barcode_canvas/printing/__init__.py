from .exceptions import PrintError, PrinterUnavailableError, PrintJobError, ExportError, friendly_message
from .qt_printer import print_image, paint_image_on_printer, export_png
