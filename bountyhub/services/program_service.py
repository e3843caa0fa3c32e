"""Program service layer — creation, search, status and tags.

Transaction policy: functions use flush() for ID generation, never commit().
Caller (route handler) is responsible for db.session.commit().
"""
import logging

from sqlalchemy import or_

from bountyhub.core.exceptions import AccessDenied, NotFoundError, ValidationError
from bountyhub.models import db
from bountyhub.models.program import PROGRAM_STATUS_ACTIVE, PROGRAM_STATUSES, Program, ProgramTag
from bountyhub.models.report import Report
from bountyhub.models.user import User
from bountyhub.services.access import ensure_program_owner
from bountyhub.utils.helpers import LIKE_ESCAPE, like_escape
from bountyhub.utils.validation import validate_program, validate_program_status, validate_tags

logger = logging.getLogger(__name__)


def get_program(program_id: int) -> Program:
    program = db.session.get(Program, program_id)
    if not program:
        raise NotFoundError("Program", program_id)
    return program


def create_program(organization: User, data: dict) -> Program:
    """Create a program owned by *organization* with its tags.

    Returns:
        Program instance (already flushed).
    """
    if not organization.is_organization:
        raise AccessDenied(organization.id, "create program", "Only organizations can create programs")

    cleaned = validate_program(data)
    tags = cleaned.pop("tags")

    program = Program(organization_id=organization.id, **cleaned)
    for tag in tags:
        program.tags.append(ProgramTag(tag=tag))
    db.session.add(program)
    db.session.flush()

    logger.info("Program %s created by organization %s (status=%s)",
                program.id, organization.id, program.status)
    return program


def search_programs(query=None, *, status=None, industry=None):
    """Build the program listing query.

    ``query`` is a case-insensitive substring match over title,
    description and industry.
    """
    q = Program.query
    if query:
        pattern = f"%{like_escape(query.strip())}%"
        q = q.filter(or_(
            Program.title.ilike(pattern, escape=LIKE_ESCAPE),
            Program.description.ilike(pattern, escape=LIKE_ESCAPE),
            Program.industry.ilike(pattern, escape=LIKE_ESCAPE),
        ))
    if status:
        if status not in PROGRAM_STATUSES:
            raise ValidationError(f"Invalid status '{status}'", details={"status": "invalid"})
        q = q.filter(Program.status == status)
    if industry:
        q = q.filter(Program.industry.ilike(like_escape(industry), escape=LIKE_ESCAPE))
    return q.order_by(Program.created_at.desc(), Program.id.desc())


def popular_programs(limit: int) -> list[Program]:
    """Newest active programs."""
    return (
        Program.query.filter_by(status=PROGRAM_STATUS_ACTIVE)
        .order_by(Program.created_at.desc(), Program.id.desc())
        .limit(limit)
        .all()
    )


def programs_for_organization(organization_id: int) -> list[Program]:
    organization = db.session.get(User, organization_id)
    if not organization or not organization.is_organization:
        raise NotFoundError("Organization", organization_id)
    return Program.query.filter_by(organization_id=organization_id).order_by(Program.id).all()


def update_program_status(program_id: int, data: dict, actor: User) -> Program:
    program = get_program(program_id)
    ensure_program_owner(actor, program, "change program status")
    new_status = validate_program_status(data)

    old_status = program.status
    program.status = new_status
    db.session.flush()
    logger.info("Program %s status %s → %s by user %s", program.id, old_status, new_status, actor.id)
    return program


def add_program_tags(program_id: int, tags, actor: User) -> Program:
    program = get_program(program_id)
    ensure_program_owner(actor, program, "tag program")

    errors: dict = {}
    cleaned = validate_tags(tags, errors)
    if errors or not cleaned:
        raise ValidationError("tags must be a non-empty list of strings", details=errors or {"tags": "required"})

    for tag in cleaned:
        program.tags.append(ProgramTag(tag=tag))
    db.session.flush()
    return program


def program_reports(program_id: int, actor: User, *, status=None) -> list[Report]:
    """Reports submitted against a program, for its owning organization."""
    program = get_program(program_id)
    ensure_program_owner(actor, program, "list program reports")
    q = Report.query.filter_by(program_id=program.id)
    if status:
        q = q.filter_by(status=status)
    return q.order_by(Report.created_at.desc(), Report.id.desc()).all()
