# cinema_brew/features/projects/router.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cinema_brew.db import get_db
from .schemas import ProjectOut, SaveProjectRequest, SaveProjectResponse
from .service import UnknownUserError, list_projects, save_project

router = APIRouter(prefix="/api/v1", tags=["projects"])

@router.post("/projects", response_model=SaveProjectResponse)
async def save_project_endpoint(req: SaveProjectRequest, db: Session = Depends(get_db)) -> SaveProjectResponse:
    try:
        return SaveProjectResponse(id=save_project(db, req))
    except UnknownUserError:
        raise HTTPException(status_code=404, detail="Unknown user")

@router.get("/projects/{user_id}", response_model=List[ProjectOut])
async def list_projects_endpoint(user_id: int, db: Session = Depends(get_db)) -> List[ProjectOut]:
    return list_projects(db, user_id)
