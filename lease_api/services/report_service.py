"""Lease history exports (CSV and PDF)."""
from __future__ import annotations

import csv
import html
import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from lease_api.core.config import get_settings
from lease_api.db.models import Lease
from lease_api.repositories.sql_repository import SQLRepository
from lease_api.services.errors import ValidationError

logger = logging.getLogger(__name__)

CSV_HEADER = ("LeaseID", "CarModel", "CustomerEmail", "StartDate", "EndDate")
ONGOING = "ONGOING"


@dataclass
class ExportResult:
    content: bytes
    media_type: str
    filename: str


def _end_label(lease: Lease) -> str:
    return ONGOING if lease.is_active else lease.end_date.isoformat()


def export_row(lease: Lease) -> tuple[str, str, str, str, str]:
    return (
        str(lease.id),
        lease.car.model,
        lease.customer.email,
        lease.start_date.isoformat(),
        _end_label(lease),
    )


def report_line(lease: Lease) -> str:
    return (
        f"Lease ID: {lease.id} | Car: {lease.car.model} | Customer: {lease.customer.email}"
        f" | Start: {lease.start_date.isoformat()} | End: {_end_label(lease)}"
    )


class ReportService:
    def __init__(self) -> None:
        self.repository = SQLRepository()

    def _leases(self, leases: Optional[Iterable[Lease]]) -> list[Lease]:
        return list(leases) if leases is not None else self.repository.list_leases()

    def export_csv(self, leases: Optional[Iterable[Lease]] = None) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for lease in self._leases(leases):
            writer.writerow(export_row(lease))
        return buffer.getvalue()

    def export_pdf(self, leases: Optional[Iterable[Lease]] = None, *, generated_at: datetime | None = None) -> bytes:
        """Render the lease history as a paginated A4 PDF."""
        rows = self._leases(leases)
        generated = (generated_at or datetime.now()).isoformat(timespec="seconds")
        styles = getSampleStyleSheet()
        title_style = ParagraphStyle("LeaseTitle", parent=styles["Title"], fontName="Helvetica-Bold", fontSize=16)
        body_style = ParagraphStyle("LeaseBody", parent=styles["Normal"], fontName="Helvetica", fontSize=12, leading=15)

        story = [
            Paragraph(html.escape(get_settings().report_title, quote=False), title_style),
            Paragraph(f"Generated: {generated}", body_style),
            Spacer(1, 12),
        ]
        story.extend(Paragraph(html.escape(report_line(lease), quote=False), body_style) for lease in rows)

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=A4, title=get_settings().report_title)
        doc.build(story)
        return buffer.getvalue()

    def export(self, fmt: str | None = "csv") -> ExportResult:
        kind = (fmt or "csv").strip().lower()
        if kind == "csv":
            logger.info("Exporting lease history as CSV")
            return ExportResult(self.export_csv().encode("utf-8"), "text/csv", "lease-history.csv")
        if kind == "pdf":
            logger.info("Exporting lease history as PDF")
            return ExportResult(self.export_pdf(), "application/pdf", "lease-history.pdf")
        raise ValidationError(f"Unsupported export format: {fmt}")
