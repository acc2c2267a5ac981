from __future__ import annotations


class VotingError(Exception):
    message = "Voting error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class DuplicateVote(VotingError):
    message = "This email has already been used to vote. Only one vote per email is allowed."


class InvalidCountry(VotingError):
    message = "Invalid country code"


class VoteFailed(VotingError):
    message = "Failed to submit vote"


class ReferenceDataUnavailable(VoteFailed):
    message = "Failed to fetch countries"
