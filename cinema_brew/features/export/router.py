# cinema_brew/features/export/router.py
from fastapi import APIRouter
from fastapi.responses import Response

from .schemas import ExportPdfRequest
from .service import build_section_pdf, export_filename

router = APIRouter(prefix="/api/v1", tags=["export"])

@router.post("/export/pdf")
async def export_pdf_endpoint(req: ExportPdfRequest) -> Response:
    pdf = build_section_pdf(req.section, req.package)
    filename = export_filename(req.section, req.package, req.filename)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
