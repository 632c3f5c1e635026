"""Application exceptions.

Services raise these; the endpoint layer maps each one onto an HTTP
status code.  Business-rule rejections of an enrollment are not
exceptions: they come back as an ``EnrollmentResult`` with a non-zero
code.
"""


class GymApiError(Exception):
    """Base exception for all gym API errors."""

    pass


class DataStoreError(GymApiError):
    """Raised when the database cannot be reached or a statement fails.

    The underlying ``sqlite3`` error is chained as ``__cause__``.
    """

    pass


class MemberNotFoundError(GymApiError):
    """Raised when a requested member does not exist."""

    def __init__(self, member_id: int):
        """Initialize the exception.

        Args:
            member_id: The ID of the member that was not found.
        """
        self.member_id = member_id
        super().__init__(f"Member {member_id} not found")


class EnrollmentNotFoundError(GymApiError):
    """Raised when a member is not enrolled in the given class."""

    def __init__(self, member_id: int, class_id: int):
        self.member_id = member_id
        self.class_id = class_id
        super().__init__(f"Member {member_id} is not enrolled in class {class_id}")
