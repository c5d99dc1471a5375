"""
Error taxonomy for the admission engine.

Every error carries a ``kind`` so the HTTP layer can choose a status code
without reading the message: ``client_input`` errors are caller-fixable,
``data_state`` errors describe what the store does or does not hold.
"""

CLIENT_INPUT = "client_input"
DATA_STATE = "data_state"


class AdmissionError(Exception):
    kind = DATA_STATE
    code = "admission_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(AdmissionError):
    kind = CLIENT_INPUT


class DataStateError(AdmissionError):
    kind = DATA_STATE


# =============================================================================
# CLIENT INPUT
# =============================================================================

class InvalidInput(ClientInputError):
    code = "invalid_input"


class TooFewCandidates(InvalidInput):
    code = "too_few_ids"


class TooManyCandidates(InvalidInput):
    code = "too_many_ids"


class DuplicateCandidates(InvalidInput):
    code = "duplicate_ids"


# =============================================================================
# DATA STATE
# =============================================================================

class NoCutoffForCategory(DataStateError):
    """A record has no cutoff band for the requested category."""
    code = "no_cutoff_for_category"


class CollegeNotFound(DataStateError):
    code = "college_not_found"


class CourseNotFound(DataStateError):
    code = "course_not_found"
