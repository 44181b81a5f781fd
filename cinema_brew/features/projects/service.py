# cinema_brew/features/projects/service.py
import json
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from cinema_brew.db import Project, User
from cinema_brew.logger import get_logger
from .schemas import ProjectOut, SaveProjectRequest

log = get_logger(__name__)


class UnknownUserError(Exception):
    pass


def save_project(db: Session, req: SaveProjectRequest) -> int:
    if db.get(User, req.user_id) is None:
        raise UnknownUserError(req.user_id)
    project = Project(
        user_id=req.user_id,
        concept=req.concept,
        data=json.dumps(req.data, ensure_ascii=False),
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    log.info(f"Saved project {project.id} for user {req.user_id}")
    return project.id

def list_projects(db: Session, user_id: int) -> List[ProjectOut]:
    rows = db.execute(
        select(Project)
        .where(Project.user_id == user_id)
        .order_by(Project.created_at.desc(), Project.id.desc())
    ).scalars().all()
    return [
        ProjectOut(
            id=p.id,
            user_id=p.user_id,
            concept=p.concept,
            data=json.loads(p.data),
            created_at=p.created_at,
        )
        for p in rows
    ]
