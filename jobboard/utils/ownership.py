# ========================================
# jobboard/utils/ownership.py - ownership policy
# ========================================
#
# A job, and the applications submitted to it, may only be changed or
# disclosed by the employer who posted the job. Every handler that touches
# another user's job goes through ``ensure_owner`` after the resource has
# been loaded and before anything is written or returned.

import logging

from jobboard.errors import Forbidden
from jobboard.utils.ids import stringify_id

logger = logging.getLogger(__name__)


def is_owner(owner_id, caller_id) -> bool:
    """Compare two user references regardless of ObjectId/str representation."""
    if owner_id is None or caller_id is None:
        return False
    return stringify_id(owner_id) == stringify_id(caller_id)


def ensure_owner(owner_id, caller_id, message: str = "Not authorized"):
    if not is_owner(owner_id, caller_id):
        logger.warning("Ownership check failed: caller %s is not owner %s", caller_id, owner_id)
        raise Forbidden(message)
