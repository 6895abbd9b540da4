# routers/admin.py
"""
Admin API: raw collection browsing, row insert/delete and data export.

All routes require the admin role.
"""

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_role
from routers.errors import service_errors
from schemas.admin import CollectionResponse, OverviewResponse
from services.admin_service import AdminService
from services.export_service import export_filename, to_csv, to_csv_all_collections, to_json_dump, to_jsonl

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_role("admin"))])

FORMAT_PATTERN = "^(csv|txt)$"


def _attachment(content: str, filename: str, media_type: str) -> Response:
     return Response(
          content=content,
          media_type=media_type,
          headers={"Content-Disposition": f'attachment; filename="{filename}"'},
     )


@router.get("/overview", response_model=OverviewResponse)
def overview(db: Session = Depends(get_session)):
     return {"data": AdminService.overview(db)}


@router.get("/export", summary="Download every collection")
def export_all(
     format: str = Query("csv", pattern=FORMAT_PATTERN),
     db: Session = Depends(get_session),
):
     """
     - **csv**: one file, leading ``__collection`` column
     - **txt**: the overview as indented JSON
     """
     data = AdminService.overview(db)
     filename = export_filename(ext=format)
     if format == "csv":
          return _attachment(to_csv_all_collections(data), filename, "text/csv; charset=utf-8")
     return _attachment(to_json_dump(data), filename, "text/plain; charset=utf-8")


@router.get("/collection/{name}", response_model=CollectionResponse)
def collection(name: str, db: Session = Depends(get_session)):
     with service_errors():
          result = AdminService.collection(db, name)
     return {"data": result["data"], "columns": result["columns"], "formFields": result["form_fields"]}


@router.get("/collection/{name}/export")
def export_collection(
     name: str,
     format: str = Query("csv", pattern=FORMAT_PATTERN),
     db: Session = Depends(get_session),
):
     with service_errors():
          rows = AdminService.collection(db, name)["data"]
     if format == "csv":
          return _attachment(to_csv(rows), f"{name}.csv", "text/csv; charset=utf-8")
     return _attachment(to_jsonl(rows), f"{name}.txt", "text/plain; charset=utf-8")


@router.post("/collection/{name}", status_code=status.HTTP_201_CREATED)
def create_row(
     name: str,
     payload: dict = Body(...),
     db: Session = Depends(get_session),
):
     with service_errors():
          row = AdminService.create_row(db, name, payload)
          db.commit()
     return {"data": row}


@router.delete("/collection/{name}/{row_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_row(name: str, row_id: int, db: Session = Depends(get_session)):
     with service_errors():
          AdminService.delete_row(db, name, row_id)
          db.commit()
     return Response(status_code=status.HTTP_204_NO_CONTENT)
