from .report_service import ReportService, ReportFormat

__all__ = ["ReportService", "ReportFormat"]
