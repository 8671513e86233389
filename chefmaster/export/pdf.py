import base64
import binascii
import io
import logging
import re
import unicodedata
from typing import List, Optional
from xml.sax.saxutils import escape

import requests
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Image,
    ListFlowable,
    ListItem,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from chefmaster.constants import ExportConfig
from chefmaster.render.view import SheetView


def export_filename(dish_name: str) -> str:
    """'Ficha_<요리명>.pdf' (공백 -> '_', 파일명에 쓸 수 없는 문자 제거)"""
    name = re.sub(r"\s+", "_", (dish_name or "").strip())
    name = re.sub(r"[^\w.-]", "", name)
    return f"{ExportConfig.FILENAME_PREFIX}{name or 'plato'}.pdf"


def ascii_filename(filename: str) -> str:
    """Content-Disposition의 filename 파라미터용 ASCII 대체 파일명"""
    normalized = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    return normalized or "ficha.pdf"


class PdfExporter:
    def __init__(
        self,
        *,
        margin_mm: float = ExportConfig.MARGIN_MM,
        image_max_mm: float = ExportConfig.IMAGE_MAX_MM,
        image_fetch_timeout: float = ExportConfig.IMAGE_FETCH_TIMEOUT,
    ):
        self.logger = logging.getLogger(__name__)
        self.margin = margin_mm * mm
        self.image_max = image_max_mm * mm
        self.image_fetch_timeout = image_fetch_timeout

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle("SheetTitle", parent=styles["Title"], fontSize=22, leading=26, alignment=0)
        self.heading_style = ParagraphStyle("SheetHeading", parent=styles["Heading2"], spaceBefore=10, spaceAfter=6)
        self.body_style = ParagraphStyle("SheetBody", parent=styles["Normal"], fontSize=10, leading=13.5, spaceAfter=3)
        self.meta_style = ParagraphStyle("SheetMeta", parent=self.body_style, textColor=colors.grey)
        self.quote_style = ParagraphStyle("SheetQuote", parent=self.body_style, fontName="Helvetica-Oblique", leftIndent=8)
        self.cell_style = ParagraphStyle("SheetCell", parent=self.body_style, spaceAfter=0)

    def render(self, view: SheetView) -> bytes:
        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=A4,
            leftMargin=self.margin,
            rightMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin,
            title=view.dish_name,
            author="ChefMaster PRO",
        )
        doc.build(self._story(view))
        return buf.getvalue()

    def _story(self, view: SheetView) -> list:
        story: list = [
            Paragraph(f"<b>{escape(view.dish_name.upper())}</b>", self.title_style),
            Paragraph(f"{escape(view.category)} · {escape(view.prep_time)}", self.meta_style),
            Spacer(1, 6),
            Paragraph(f"\"{escape(view.description)}\"", self.quote_style),
            Spacer(1, 8),
        ]

        image = self._image_flowable(view.image_url)
        if image is not None:
            story += [image, Spacer(1, 8)]

        story.append(Paragraph(
            f"<b>Precio sugerido ({escape(view.currency)}): {escape(view.suggested_price)}</b> · "
            f"Costo por porción: {escape(view.cost_per_portion)} · "
            f"Porciones: {escape(view.yield_portions)} · Margen: {escape(view.margin)}",
            self.body_style,
        ))

        story.append(Paragraph("<b>Desglose de Costos</b>", self.heading_style))
        story.append(self._cost_table(view))

        story.append(Paragraph("<b>Preparación</b>", self.heading_style))
        story.append(self._numbered([self._step_text(s) for s in view.steps]))

        for title, items in (
            ("Mise en Place", view.mise_en_place),
            ("Alérgenos", view.allergens),
            ("Control de Calidad", view.qc_checklist),
        ):
            story.append(Paragraph(f"<b>{title}</b>", self.heading_style))
            story.append(self._bullets(items))

        for title, text in (
            ("Emplatado", view.plating),
            ("Variantes", view.variants),
            ("Refrigeración", view.refrigeration),
            ("Congelación", view.freezing),
        ):
            if text:
                story.append(Paragraph(f"<b>{title}</b>", self.heading_style))
                story.append(Paragraph(escape(text), self.body_style))

        return story

    def _cost_table(self, view: SheetView) -> Table:
        rows: List[list] = [["Ingrediente", "Cant.", "Costo Unit.", "Subtotal"]]
        for ing in view.ingredients:
            rows.append([
                Paragraph(escape(ing.name), self.cell_style),
                ing.quantity,
                ing.unit_cost,
                ing.subtotal,
            ])
        rows.append(["Costo Producción Unitario", "", "", view.total_cost])

        table = Table(rows, colWidths=[80 * mm, 35 * mm, 35 * mm, 35 * mm], repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#0f172a")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ("SPAN", (0, -1), (2, -1)),
            ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
            ("ALIGN", (0, -1), (2, -1), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LINEBELOW", (0, 0), (-1, -2), 0.25, colors.lightgrey),
            ("BACKGROUND", (0, -1), (-1, -1), colors.HexColor("#f8fafc")),
        ]))
        return table

    def _step_text(self, step) -> str:
        text = escape(step.description)
        badges = [escape(b) for b in (step.temp, step.time) if b]
        if badges:
            text += f" <font color='grey'>[{' · '.join(badges)}]</font>"
        return text

    def _numbered(self, texts: List[str]) -> ListFlowable:
        items = [ListItem(Paragraph(t, self.body_style), value=i + 1) for i, t in enumerate(texts)]
        return ListFlowable(items or [ListItem(Paragraph("—", self.body_style))], bulletType="1", leftIndent=12)

    def _bullets(self, texts: List[str]) -> ListFlowable:
        items = [ListItem(Paragraph(escape(t), self.body_style), bulletText="•") for t in texts]
        return ListFlowable(items or [ListItem(Paragraph("—", self.body_style))], bulletType="bullet", start="•", leftIndent=12)

    def _image_flowable(self, image_url: Optional[str]) -> Optional[Image]:
        data = self._load_image_bytes(image_url)
        if not data:
            return None
        try:
            return Image(io.BytesIO(data), width=self.image_max, height=self.image_max, kind="proportional", lazy=0)
        except Exception as e:
            self.logger.warning(f"PDF 이미지 로딩 실패, 이미지 없이 내보냅니다: {e}")
            return None

    def _load_image_bytes(self, image_url: Optional[str]) -> Optional[bytes]:
        if not image_url:
            return None

        if image_url.startswith("data:"):
            _, _, encoded = image_url.partition(",")
            try:
                return base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError) as e:
                self.logger.warning(f"data URI 디코딩 실패: {e}")
                return None

        if image_url.startswith(("http://", "https://")):
            try:
                resp = requests.get(image_url, timeout=self.image_fetch_timeout)
                resp.raise_for_status()
                return resp.content
            except requests.RequestException as e:
                self.logger.warning(f"이미지 다운로드 실패: {e}")
                return None

        return None
