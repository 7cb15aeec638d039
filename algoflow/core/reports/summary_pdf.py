"""
Decision Summary PDF Generator

Renders a DecisionSummary as a printable PDF:
- Title and guideline/version subtitle
- Numbered decision path with the choice taken and why each step matters
- Green RECOMMENDATION box with the outcome
- Key takeaways and references
- "Page N of M" footer
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape
import io
import os

from reportlab.lib.pagesizes import A4
from reportlab.lib.colors import HexColor
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.enums import TA_CENTER
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, KeepTogether
)

from algoflow.config import settings
from algoflow.core.summary import DecisionSummary, DocumentGenerator
from algoflow.utils import get_logger

logger = get_logger(__name__)

ACCENT = HexColor("#6C5CE7")
RECOMMENDATION_GREEN = HexColor("#16A34A")
RECOMMENDATION_FILL = HexColor("#F0FDF4")
MUTED = HexColor("#64748B")

DISCLAIMER = (
    "This summary reflects the choices made while stepping through a published "
    "guideline algorithm. It is an educational aid and does not replace "
    "clinical judgement."
)


@dataclass
class SummaryReport:
    """Data container for a generated summary PDF."""
    report_id: str
    generated_at: datetime
    algorithm_id: str
    step_count: int = 0
    outcome_label: str = ""
    pdf_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "generated_at": self.generated_at.isoformat(),
            "algorithm_id": self.algorithm_id,
            "step_count": self.step_count,
            "outcome_label": self.outcome_label,
            "pdf_path": self.pdf_path,
        }


class _NumberedCanvas(canvas.Canvas):
    """Defers page output until the total page count is known."""

    def __init__(self, *args, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _draw_footer(self, total: int):
        self.saveState()
        self.setFont("Helvetica", 8)
        self.setFillColor(MUTED)
        self.drawCentredString(
            self._pagesize[0] / 2, 0.45 * inch, f"Page {self._pageNumber} of {total}"
        )
        self.restoreState()


class SummaryPDFGenerator(DocumentGenerator):
    """Generates decision-path summary PDFs with reportlab."""

    name = "pdf"

    def __init__(self, output_dir: Optional[str] = None):
        self.output_dir = output_dir or settings.report_output_dir
        os.makedirs(self.output_dir, exist_ok=True)

        self._styles = getSampleStyleSheet()
        self._create_custom_styles()

        logger.info(f"SummaryPDFGenerator initialized, output: {self.output_dir}")

    def _create_custom_styles(self):
        """Create custom paragraph styles."""
        self._styles.add(ParagraphStyle(
            name='SummaryTitle',
            parent=self._styles['Title'],
            fontSize=20,
            spaceAfter=6,
            textColor=HexColor("#1E293B"),
            alignment=TA_CENTER,
            fontName='Helvetica-Bold'
        ))
        self._styles.add(ParagraphStyle(
            name='SummarySubtitle',
            parent=self._styles['Normal'],
            fontSize=10,
            textColor=MUTED,
            alignment=TA_CENTER,
            spaceAfter=18
        ))
        self._styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self._styles['Heading2'],
            fontSize=14,
            spaceBefore=16,
            spaceAfter=10,
            textColor=ACCENT,
            fontName='Helvetica-Bold'
        ))
        self._styles.add(ParagraphStyle(
            name='StepLabel',
            parent=self._styles['Normal'],
            fontSize=8,
            textColor=MUTED,
            fontName='Helvetica-Bold',
            spaceAfter=2
        ))
        self._styles.add(ParagraphStyle(
            name='StepNode',
            parent=self._styles['Normal'],
            fontSize=11,
            leading=14,
            fontName='Helvetica-Bold'
        ))
        self._styles.add(ParagraphStyle(
            name='StepChoice',
            parent=self._styles['Normal'],
            fontSize=10,
            leading=13,
            textColor=ACCENT,
            leftIndent=12
        ))
        self._styles.add(ParagraphStyle(
            name='StepWhy',
            parent=self._styles['Normal'],
            fontSize=9,
            leading=12,
            textColor=HexColor("#4B5563"),
            fontName='Helvetica-Oblique',
            leftIndent=12,
            spaceAfter=10
        ))
        self._styles.add(ParagraphStyle(
            name='Recommendation',
            parent=self._styles['Normal'],
            fontSize=12,
            leading=16,
            textColor=HexColor("#14532D"),
            fontName='Helvetica-Bold'
        ))
        self._styles.add(ParagraphStyle(
            name='SummaryBody',
            parent=self._styles['Normal'],
            fontSize=10,
            leading=14,
            spaceAfter=6
        ))
        self._styles.add(ParagraphStyle(
            name='Caveat',
            parent=self._styles['Normal'],
            fontSize=8,
            textColor=MUTED,
            spaceBefore=4,
            spaceAfter=4
        ))

    # ── Public API ────────────────────────────────────────────────────────
    def generate(self, summary: DecisionSummary) -> SummaryReport:
        """
        Write the summary PDF to the output directory.

        Returns:
            SummaryReport with the PDF path
        """
        generated_at = datetime.now()
        report = SummaryReport(
            report_id=f"SR-{generated_at.strftime('%Y%m%d-%H%M%S')}",
            generated_at=generated_at,
            algorithm_id=summary.algorithm_id,
            step_count=len(summary.steps),
            outcome_label=summary.outcome.label,
        )

        filepath = os.path.join(self.output_dir, self.filename_for(summary, generated_at))
        self._build(summary, filepath, generated_at)
        report.pdf_path = filepath

        logger.info(f"Summary report generated: {filepath}")
        return report

    def generate_bytes(self, summary: DecisionSummary) -> bytes:
        """Render the summary PDF in memory."""
        buffer = io.BytesIO()
        self._build(summary, buffer, datetime.now())
        return buffer.getvalue()

    @staticmethod
    def filename_for(summary: DecisionSummary, when: Optional[datetime] = None) -> str:
        when = when or datetime.now()
        return f"{summary.algorithm_id}-algorithm-{when.strftime('%Y-%m-%d')}.pdf"

    # ── Rendering ─────────────────────────────────────────────────────────
    def _build(self, summary: DecisionSummary, target, generated_at: datetime) -> None:
        doc = SimpleDocTemplate(
            target,
            pagesize=A4,
            rightMargin=0.75*inch,
            leftMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.85*inch,
            title=summary.title,
        )
        doc.build(self._story(summary, generated_at), canvasmaker=_NumberedCanvas)

    def _story(self, summary: DecisionSummary, generated_at: datetime) -> List:
        styles = self._styles
        story = []

        story.append(Paragraph(escape(summary.title), styles['SummaryTitle']))
        subtitle = escape(summary.guideline or summary.algorithm_id)
        if summary.version:
            subtitle += f" | Version {escape(summary.version)}"
        subtitle += f" | Generated {generated_at.strftime('%B %d, %Y')}"
        story.append(Paragraph(subtitle, styles['SummarySubtitle']))

        # ===== DECISION PATH =====
        story.append(Paragraph("Your Decision Path", styles['SectionHeader']))
        if not summary.steps:
            story.append(Paragraph("The outcome was reached without any choices.", styles['SummaryBody']))

        for step in summary.steps:
            block = [
                Paragraph(f"STEP {step.step}", styles['StepLabel']),
                Paragraph(escape(step.node_label), styles['StepNode']),
                Paragraph(f"&raquo; {escape(step.choice)}", styles['StepChoice']),
            ]
            if step.note:
                block.append(Paragraph(escape(step.note), styles['StepChoice']))
            if step.node_why:
                block.append(Paragraph(escape(step.node_why), styles['StepWhy']))
            else:
                block.append(Spacer(1, 8))
            story.append(KeepTogether(block))

        # ===== RECOMMENDATION =====
        outcome = summary.outcome
        box_rows = [
            [Paragraph("RECOMMENDATION", styles['StepLabel'])],
            [Paragraph(escape(outcome.label), styles['Recommendation'])],
        ]
        if outcome.why:
            box_rows.append([Paragraph(escape(outcome.why), styles['SummaryBody'])])
        if outcome.detail:
            box_rows.append([Paragraph(escape(outcome.detail), styles['SummaryBody'])])

        box = Table(box_rows, colWidths=[6.5*inch])
        box.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), RECOMMENDATION_FILL),
            ('BOX', (0, 0), (-1, -1), 1.5, RECOMMENDATION_GREEN),
            ('LINEBEFORE', (0, 0), (0, -1), 4, RECOMMENDATION_GREEN),
            ('LEFTPADDING', (0, 0), (-1, -1), 12),
            ('RIGHTPADDING', (0, 0), (-1, -1), 12),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))
        story.append(Spacer(1, 12))
        story.append(KeepTogether([box]))

        # ===== KEY TAKEAWAYS =====
        if outcome.key_points:
            story.append(Paragraph("Key Takeaways", styles['SectionHeader']))
            for point in outcome.key_points:
                story.append(Paragraph(f"&bull; {escape(point)}", styles['SummaryBody']))

        if outcome.references:
            story.append(Paragraph("References", styles['SectionHeader']))
            for i, ref in enumerate(outcome.references, 1):
                story.append(Paragraph(f"{i}. {escape(ref)}", styles['Caveat']))

        story.append(Spacer(1, 20))
        story.append(Paragraph(f"<b>DISCLAIMER:</b> {DISCLAIMER}", styles['Caveat']))
        return story

