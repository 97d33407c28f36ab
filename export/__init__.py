"""Export-Modul: Excel (openpyxl) und Terminal-Tabellen (Rich) für den Besprechungsplan."""

from export.excel_export import ExcelExporter

__all__ = ["ExcelExporter"]
