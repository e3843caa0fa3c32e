"""Learning resources shared on the platform."""
import logging

from bountyhub.models import db
from bountyhub.models.resource import Resource
from bountyhub.models.user import User
from bountyhub.utils.helpers import LIKE_ESCAPE, like_escape
from bountyhub.utils.validation import validate_resource

logger = logging.getLogger(__name__)


def list_resources(category=None):
    q = Resource.query
    if category:
        q = q.filter(Resource.category.ilike(like_escape(category), escape=LIKE_ESCAPE))
    return q.order_by(Resource.created_at.desc(), Resource.id.desc())


def create_resource(author: User, data: dict) -> Resource:
    cleaned = validate_resource(data)
    resource = Resource(author_id=author.id, **cleaned)
    db.session.add(resource)
    db.session.flush()
    logger.info("Resource %s published by user %s", resource.id, author.id)
    return resource
