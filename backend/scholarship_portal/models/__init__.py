# Models package init
"""
Scholarship Portal Backend — ORM Models
========================================

Importing this package registers every collection table on Base.metadata.

Collections:
    - scholarships          (Scholarship)
    - users                 (User)
    - reviews               (Review)
    - applied_scholarships  (AppliedScholarship)
"""

from scholarship_portal.models.applied_scholarship import AppliedScholarship
from scholarship_portal.models.review import Review
from scholarship_portal.models.scholarship import Scholarship
from scholarship_portal.models.user import User

__all__ = ["AppliedScholarship", "Review", "Scholarship", "User"]
