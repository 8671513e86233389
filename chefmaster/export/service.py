import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from chefmaster.constants import PricingConfig
from chefmaster.export.exception import ExportErrorCode, ExportException
from chefmaster.export.pdf import PdfExporter, export_filename
from chefmaster.render.view import SheetView
from chefmaster.session.exception import SessionErrorCode, SessionException
from chefmaster.session.store import SheetSession


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


class ExportService:
    def __init__(self, exporter: PdfExporter, currency: str = PricingConfig.CURRENCY):
        self.logger = logging.getLogger(__name__)
        self.exporter = exporter
        self.currency = currency

    async def export(self, session: SheetSession) -> Optional[ExportedFile]:
        """현재 시트를 PDF로 내보낸다. 시트가 없으면 아무것도 하지 않고 None."""
        sheet = session.sheet
        if sheet is None:
            return None
        if session.exporting:
            raise SessionException(SessionErrorCode.SESSION_BUSY)

        session.exporting = True
        try:
            view = SheetView.from_sheet(sheet, self.currency)
            content = await asyncio.to_thread(self.exporter.render, view)
        except Exception as e:
            self.logger.exception(f"[ExportService] ▶ PDF 내보내기 실패 | dish_name={sheet.dish_name}")
            raise ExportException(ExportErrorCode.EXPORT_FAILED) from e
        finally:
            session.exporting = False

        filename = export_filename(sheet.dish_name)
        self.logger.info(f"[ExportService] ▶ PDF 내보내기 완료 | filename={filename} | size={len(content)}")
        return ExportedFile(filename=filename, content=content)
