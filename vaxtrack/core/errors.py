# core/errors.py
"""
Errors raised by the workflow and reference-data operations.

Each class carries the message shown to the caller and the HTTP status the API layer
renders it with. Messages never include stack traces or database internals.
"""


class VaxTrackError(Exception):
	"""Base class for every user-facing failure."""
	status_code: int = 500

	def __init__(self, msg: str):
		super().__init__(msg)
		self.msg = msg

class ValidationError(VaxTrackError):
	"""Malformed or missing input, or a request the current data cannot satisfy."""
	status_code = 400

class NotFound(VaxTrackError):
	"""Referenced entity does not exist or is not owned by the caller."""
	status_code = 404

class ConflictingState(VaxTrackError):
	"""A transition or deletion guard failed because of the current status or live references."""
	status_code = 400

	@classmethod
	def transition(cls, current: str, action: str) -> "ConflictingState":
		return cls(f"Cannot {action} a vaccination schedule with status '{current}'.")

class Unauthorized(VaxTrackError):
	status_code = 401

class Forbidden(VaxTrackError):
	status_code = 403

class ServerError(VaxTrackError):
	"""Unexpected data-store failure."""
	status_code = 500
